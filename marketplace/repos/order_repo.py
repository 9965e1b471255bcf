# marketplace/repos/order_repo.py
from sqlalchemy import select

from marketplace.data.models.order import OrderModel
from marketplace.data.models.order_item import OrderItemModel
from marketplace.repos.base import BaseRepo


class OrderRepo(BaseRepo):
    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_line(self, line: OrderItemModel) -> OrderItemModel:
        self.db.add(line)
        return line

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_lines(self, order_id: int, seller_id: int | None = None) -> list[OrderItemModel]:
        stmt = select(OrderItemModel).where(OrderItemModel.order_id == order_id)
        if seller_id is not None:
            stmt = stmt.where(OrderItemModel.seller_id == seller_id)
        return list(self.db.execute(stmt.order_by(OrderItemModel.id)).scalars())

    def list_buyer_orders(self, buyer_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.buyer_id == buyer_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def list_seller_orders(self, seller_id: int) -> list[OrderModel]:
        seller_order_ids = (
            select(OrderItemModel.order_id)
            .where(OrderItemModel.seller_id == seller_id)
            .distinct()
        )
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.id.in_(seller_order_ids))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def is_seller_on_order(self, order_id: int, seller_id: int) -> bool:
        return self.db.execute(
            select(OrderItemModel.id)
            .where(
                OrderItemModel.order_id == order_id,
                OrderItemModel.seller_id == seller_id,
            )
            .limit(1)
        ).first() is not None
