# import every model so SQLAlchemy registers it on Base.metadata

from marketplace.data.models.user import UserModel
from marketplace.data.models.item import ItemModel
from marketplace.data.models.cart_item import CartItemModel
from marketplace.data.models.order import OrderModel
from marketplace.data.models.order_item import OrderItemModel
from marketplace.data.models.notification import NotificationModel

__all__ = [
    "UserModel",
    "ItemModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "NotificationModel",
]
