# marketplace/repos/cart_repo.py
from decimal import Decimal

from sqlalchemy import select, delete, func

from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.item import ItemModel
from marketplace.repos.base import BaseRepo


class CartRepo(BaseRepo):
    def get_cart_line(self, user_id: int, item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def get_lines_with_items(self, user_id: int, for_update: bool = False):
        """
        (CartItemModel, ItemModel) pairs for the user, in insertion order.
        With for_update the cart rows stay locked until commit/rollback.
        """
        stmt = (
            select(CartItemModel, ItemModel)
            .join(ItemModel, CartItemModel.item_id == ItemModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update(of=CartItemModel)
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def total_price(self, user_id: int) -> Decimal:
        total = self.db.execute(
            select(func.sum(ItemModel.price * CartItemModel.quantity))
            .select_from(CartItemModel)
            .join(ItemModel, CartItemModel.item_id == ItemModel.id)
            .where(CartItemModel.user_id == user_id)
        ).scalar()
        return Decimal(str(total or 0)).quantize(Decimal("0.01"))

    def add_cart_line(self, line: CartItemModel) -> CartItemModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_cart_line(self, user_id: int, item_id: int) -> bool:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
        )
        return result.rowcount > 0

    def delete_lines(self, line_ids: list[int]) -> int:
        if not line_ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.id.in_(line_ids))
        )
        return result.rowcount

    def clear_cart(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount
