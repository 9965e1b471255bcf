# marketplace/api/routers/items.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_db, require_seller
from marketplace.domain.schemas import (
    ItemCreate,
    ItemCreatedOut,
    ItemOut,
    ItemUpdate,
    MessageOut,
    SessionOut,
)
from marketplace.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["items"])


def get_service(db: Session):
    return ItemService(db)


@router.get("", response_model=List[ItemOut])
def list_items(db: Session = Depends(get_db)):
    return get_service(db).list_items()


@router.get("/category/{category}", response_model=List[ItemOut])
def list_by_category(category: str, db: Session = Depends(get_db)):
    return get_service(db).list_by_category(category)


@router.get("/search/{query}", response_model=List[ItemOut])
def search_items(query: str, db: Session = Depends(get_db)):
    """Case-insensitive match on title or description."""
    return get_service(db).search(query)


@router.get("/seller/{seller_id}", response_model=List[ItemOut])
def list_by_seller(seller_id: int, db: Session = Depends(get_db)):
    return get_service(db).list_by_seller(seller_id)


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_item(item_id)


@router.post("", response_model=ItemCreatedOut, status_code=201)
def create_item(
    payload: ItemCreate,
    current: SessionOut = Depends(require_seller),
    db: Session = Depends(get_db),
):
    item = get_service(db).create_item(current.user_id, payload)
    return {"item_id": item.id}


@router.put("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    current: SessionOut = Depends(require_seller),
    db: Session = Depends(get_db),
):
    return get_service(db).update_item(item_id, current.user_id, payload)


@router.delete("/{item_id}", response_model=MessageOut)
def delete_item(
    item_id: int,
    current: SessionOut = Depends(require_seller),
    db: Session = Depends(get_db),
):
    get_service(db).delete_item(item_id, current.user_id)
    return {"message": "Item deleted successfully"}
