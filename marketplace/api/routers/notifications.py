from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_current_session, get_db
from marketplace.domain.schemas import MarkedReadOut, MessageOut, NotificationOut, SessionOut
from marketplace.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_service(db: Session):
    return NotificationService(db)


@router.get("", response_model=List[NotificationOut])
def list_notifications(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_service(db).list_all(current.user_id)


@router.get("/unread", response_model=List[NotificationOut])
def list_unread(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_service(db).list_unread(current.user_id)


@router.put("/read-all", response_model=MarkedReadOut)
def mark_all_read(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return {"updated": get_service(db).mark_all_read(current.user_id)}


@router.put("/{notification_id}/read", response_model=NotificationOut)
def mark_read(
    notification_id: int,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_service(db).mark_read(notification_id, current.user_id)


@router.delete("/{notification_id}", response_model=MessageOut)
def delete_notification(
    notification_id: int,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    get_service(db).delete(notification_id, current.user_id)
    return {"message": "Notification deleted"}
