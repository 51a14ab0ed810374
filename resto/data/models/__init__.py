#import every model so SQLAlchemy registers it in Base.metadata

from resto.data.models.product import ProductModel
from resto.data.models.cart import CartModel
from resto.data.models.cart_item import CartItemModel
from resto.data.models.order import OrderModel
from resto.data.models.order_item import OrderItemModel
from resto.data.models.queue_counter import QueueCounterModel

__all__ = [
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "QueueCounterModel",
]
