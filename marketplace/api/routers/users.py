from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_current_session, get_db, get_session_service
from marketplace.domain.schemas import (
    MessageOut,
    PasswordUpdate,
    ProfileUpdate,
    RoleUpdate,
    SessionOut,
    UserRead,
)
from marketplace.services.session_service import SessionService
from marketplace.services.user_service import UserService
from marketplace.utils.settings import SESSION_COOKIE_NAME

router = APIRouter(prefix="/user", tags=["users"])


@router.get("", response_model=UserRead)
def get_me(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return UserService(db).get_user(current.user_id)


@router.put("/role", response_model=UserRead)
def update_role(
    payload: RoleUpdate,
    request: Request,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
):
    user = UserService(db).update_role(current.user_id, payload.role)
    # keep this session's copy of the role in step
    refreshed = current.model_copy(update={"role": payload.role})
    sessions.update(request.cookies[SESSION_COOKIE_NAME], refreshed.model_dump(mode="json"))
    return user


@router.put("/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return UserService(db).update_profile(current.user_id, payload.email)


@router.put("/password", response_model=MessageOut)
def update_password(
    payload: PasswordUpdate,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    UserService(db).update_password(current.user_id, payload.current_password, payload.new_password)
    return {"message": "Password updated"}
