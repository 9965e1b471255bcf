# marketplace/repos/item_repo.py
from sqlalchemy import select, delete, or_, func

from marketplace.data.models.item import ItemModel
from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.order_item import OrderItemModel
from marketplace.repos.base import BaseRepo


class ItemRepo(BaseRepo):
    def _select(self):
        return select(ItemModel).order_by(ItemModel.created_at.desc(), ItemModel.id.desc())

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def list_items(self) -> list[ItemModel]:
        return list(self.db.execute(self._select()).scalars())

    def list_by_category(self, category: str) -> list[ItemModel]:
        return list(
            self.db.execute(self._select().where(ItemModel.category == category)).scalars()
        )

    def list_by_seller(self, seller_id: int) -> list[ItemModel]:
        return list(
            self.db.execute(self._select().where(ItemModel.seller_id == seller_id)).scalars()
        )

    def search(self, query: str) -> list[ItemModel]:
        pattern = f"%{query.lower()}%"
        stmt = self._select().where(
            or_(
                func.lower(ItemModel.title).like(pattern),
                func.lower(func.coalesce(ItemModel.description, "")).like(pattern),
            )
        )
        return list(self.db.execute(stmt).scalars())

    def add_item(self, item: ItemModel) -> ItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def is_ordered(self, item_id: int) -> bool:
        return self.db.execute(
            select(OrderItemModel.id).where(OrderItemModel.item_id == item_id).limit(1)
        ).first() is not None

    def delete_item(self, item: ItemModel):
        # cart lines go with the item
        self.db.execute(delete(CartItemModel).where(CartItemModel.item_id == item.id))
        self.db.delete(item)
        self.db.flush()
