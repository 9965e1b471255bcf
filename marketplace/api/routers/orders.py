# marketplace/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_current_session, get_db, require_seller
from marketplace.domain.schemas import (
    OrderCreatedOut,
    OrderOut,
    OrderStatusIn,
    SessionOut,
)
from marketplace.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/orders", response_model=OrderCreatedOut, status_code=201)
def place_order(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Places an order from everything in the caller's cart.
    Sellers and the buyer are notified, the cart is emptied.
    """
    order = get_service(db).place_order(current.user_id)
    return {"order_id": order.id, "total_amount": order.total_amount, "status": order.status}


@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return get_service(db).list_buyer_orders(current.user_id)


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Visible to the buyer and to any seller with items in the order."""
    return get_service(db).get_order(order_id, current.user_id)


@router.get("/seller/orders", response_model=List[OrderOut])
def list_seller_orders(
    current: SessionOut = Depends(require_seller),
    db: Session = Depends(get_db),
):
    return get_service(db).list_seller_orders(current.user_id)


@router.put("/orders/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: OrderStatusIn,
    current: SessionOut = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.update_status(order_id, payload.status.value, current.user_id)
    return svc.get_order(order_id, current.user_id)
