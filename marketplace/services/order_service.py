# marketplace/services/order_service.py
from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.orm import Session

from marketplace.data.models.order import OrderModel
from marketplace.data.models.order_item import OrderItemModel
from marketplace.domain.enums import OrderStatus, can_transition
from marketplace.domain.errors import (
    EmptyCartError,
    ForbiddenError,
    InvalidStatusTransitionError,
    InvalidValueError,
    NotFoundError,
)
from marketplace.repos.cart_repo import CartRepo
from marketplace.repos.order_repo import OrderRepo
from marketplace.services.notification_service import NotificationService
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Orders: placing an order from the cart, status changes and order reads.
    Writes that belong together share one transaction on self.db.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notifications = NotificationService(db)

    def place_order(self, buyer_id: int) -> OrderModel:
        """
        Turns the buyer's cart into an order.

        1. Reads cart lines with the current item price and seller (locked)
        2. Computes the total from those prices
        3. Creates the order and one order line per cart line,
           freezing the price as price_at_purchase
        4. Notifies every seller involved, then the buyer
        5. Removes those cart lines

        All of it commits together; on any error nothing is kept.
        """
        try:
            lines = self.cart_repo.get_lines_with_items(buyer_id, for_update=True)
            if not lines:
                raise EmptyCartError()

            total = sum((item.price * line.quantity for line, item in lines), Decimal("0.00"))

            order = self.repo.add_order(
                OrderModel(
                    buyer_id=buyer_id,
                    total_amount=total,
                    status=OrderStatus.PENDING.value,
                )
            )

            for line, item in lines:
                self.repo.add_order_line(
                    OrderItemModel(
                        order_id=order.id,
                        item_id=item.id,
                        seller_id=item.seller_id,
                        quantity=line.quantity,
                        price_at_purchase=item.price,
                    )
                )

            # one notification per seller, however many of their items were bought
            for seller_id in dict.fromkeys(item.seller_id for _, item in lines):
                self.notifications.create(
                    seller_id,
                    f"New order received for your item. Order ID: {order.id}",
                )

            self.notifications.create(
                buyer_id,
                f"Your order #{order.id} has been placed successfully!",
            )

            # only the lines that went into the order; a line added meanwhile stays
            self.cart_repo.delete_lines([line.id for line, _ in lines])

            self.db.commit()

        except EmptyCartError:
            self.db.rollback()
            logger.warning(f"User {buyer_id} tried to place an order with an empty cart")
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating order for user {buyer_id}: {e}")
            raise

        logger.info(
            f"Order {order.id} placed by user {buyer_id}: {len(lines)} lines, total {total}"
        )
        return order

    def update_status(self, order_id: int, new_status: str, acting_user_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order", order_id)

        if not self.repo.is_seller_on_order(order_id, acting_user_id):
            logger.warning(f"User {acting_user_id} is not a seller on order {order_id}")
            raise ForbiddenError("You can only update status of your own orders")

        try:
            status = OrderStatus(new_status)
        except ValueError:
            raise InvalidValueError(
                "Unknown order status",
                f"Allowed values: {', '.join(s.value for s in OrderStatus)}",
            ) from None

        current = OrderStatus(order.status)
        if not can_transition(current, status):
            raise InvalidStatusTransitionError(current.value, status.value)

        try:
            order.status = status.value
            self.notifications.create(
                order.buyer_id,
                f"Your order #{order_id} status has been updated to: {status.value}",
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating status of order {order_id}: {e}")
            raise

        logger.info(f"Order {order_id}: {current.value} -> {status.value} by seller {acting_user_id}")
        return order

    # query
    def list_buyer_orders(self, buyer_id: int) -> list[OrderModel]:
        return self.repo.list_buyer_orders(buyer_id)

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order", order_id)

        lines = self.repo.get_order_lines(order_id)
        if order.buyer_id != user_id and not any(l.seller_id == user_id for l in lines):
            raise ForbiddenError("You can only view your own orders")

        return self._order_dict(order, lines)

    def list_seller_orders(self, seller_id: int) -> list[Dict[str, Any]]:
        return [
            self._order_dict(order, self.repo.get_order_lines(order.id, seller_id=seller_id))
            for order in self.repo.list_seller_orders(seller_id)
        ]

    @staticmethod
    def _order_dict(order: OrderModel, lines: list[OrderItemModel]) -> Dict[str, Any]:
        return {
            "id": order.id,
            "buyer_id": order.buyer_id,
            "buyer_name": order.buyer.username if order.buyer else None,
            "total_amount": order.total_amount,
            "status": order.status,
            "created_at": order.created_at,
            "items": [
                {
                    "item_id": l.item_id,
                    "seller_id": l.seller_id,
                    "quantity": l.quantity,
                    "price_at_purchase": l.price_at_purchase,
                    "title": l.item.title if l.item else None,
                    "description": l.item.description if l.item else None,
                    "image_url": l.item.image_url if l.item else None,
                }
                for l in lines
            ],
        }
