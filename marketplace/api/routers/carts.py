# marketplace/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_current_session, get_db
from marketplace.domain.schemas import CartAddIn, CartOut, CartQuantityIn, SessionOut
from marketplace.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(current.user_id)


@router.post("", response_model=CartOut, status_code=201)
def add_item(
    payload: CartAddIn,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.add_item(current.user_id, payload.item_id, payload.quantity)
    return svc.get_cart(current.user_id)


@router.put("/{item_id}", response_model=CartOut)
def set_quantity(
    item_id: int,
    payload: CartQuantityIn,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Quantity 0 or less removes the item from the cart."""
    svc = get_service(db)
    svc.set_quantity(current.user_id, item_id, payload.quantity)
    return svc.get_cart(current.user_id)


@router.delete("/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.remove_item(current.user_id, item_id)
    return svc.get_cart(current.user_id)


@router.delete("", response_model=CartOut)
def clear_cart(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.clear(current.user_id)
    return svc.get_cart(current.user_id)
