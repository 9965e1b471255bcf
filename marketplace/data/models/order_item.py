from sqlalchemy import Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from marketplace.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    # snapshot of items.price when the order was placed
    price_at_purchase = Column(Numeric(10, 2), nullable=False)

    order = relationship("OrderModel", back_populates="lines")
    item = relationship("ItemModel")
