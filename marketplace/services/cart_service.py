from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.orm import Session
from marketplace.data.models.cart_item import CartItemModel
from marketplace.domain.errors import InvalidValueError, NotFoundError
from marketplace.repos.cart_repo import CartRepo
from marketplace.repos.item_repo import ItemRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Shopping cart scoped to one user.
    commands (add, set quantity, remove, clear) change state
    query (get, total) read only
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.items = ItemRepo(db)

    # query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        lines = self.repo.get_lines_with_items(user_id)

        return {
            "items": [
                {
                    "item_id": item.id,
                    "title": item.title,
                    "price": item.price,
                    "quantity": line.quantity,
                    "line_total": item.price * line.quantity,
                    "seller_id": item.seller_id,
                    "image_url": item.image_url,
                }
                for line, item in lines
            ],
            "total_price": self.total_price(user_id),
        }

    def total_price(self, user_id: int) -> Decimal:
        return self.repo.total_price(user_id)

    # commands
    def add_item(self, user_id: int, item_id: int, quantity: int = 1) -> CartItemModel:
        if quantity < 1:
            raise InvalidValueError("Quantity must be at least 1", f"Got {quantity}")
        if not self.items.get_item(item_id):
            raise NotFoundError("Item", item_id)

        existing = self.repo.get_cart_line(user_id, item_id)

        try:
            if existing:
                logger.info(
                    f"Item {item_id} already in cart of user {user_id}, quantity "
                    f"{existing.quantity} -> {existing.quantity + quantity}"
                )
                existing.quantity += quantity
                line = existing
            else:
                logger.info(f"Adding item {item_id} to cart of user {user_id}")
                line = self.repo.add_cart_line(
                    CartItemModel(user_id=user_id, item_id=item_id, quantity=quantity)
                )
            self.repo.commit()
        except Exception as e:
            logger.error(f"Error adding item {item_id} to cart: {e}")
            self.repo.rollback()
            raise

        return line

    def set_quantity(self, user_id: int, item_id: int, quantity: int):
        # non-positive quantity means the line goes away
        if quantity <= 0:
            return self.remove_item(user_id, item_id)

        line = self.repo.get_cart_line(user_id, item_id)
        if not line:
            raise NotFoundError("Cart item", item_id)

        line.quantity = quantity
        self.repo.commit()
        logger.info(f"Cart of user {user_id}: item {item_id} quantity set to {quantity}")
        return line

    def remove_item(self, user_id: int, item_id: int):
        removed = self.repo.delete_cart_line(user_id, item_id)
        if not removed:
            self.repo.rollback()
            raise NotFoundError("Cart item", item_id)

        self.repo.commit()
        logger.info(f"Item {item_id} removed from cart of user {user_id}")

    def clear(self, user_id: int) -> int:
        removed = self.repo.clear_cart(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared ({removed} lines)")
        return removed
