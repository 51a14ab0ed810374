# resto/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List
from datetime import datetime

from resto.domain.enums import Category, DiningType, PaymentChoice, OrderStatus


class CamelModel(BaseModel):
    """Json uses camelCase, python keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckoutIn(CamelModel):
    """Body of POST /checkout."""

    dining_type: DiningType
    payment_choice: PaymentChoice


class PaymentOut(CamelModel):
    method: PaymentChoice
    snap_token: str | None = None


class CheckoutOut(CamelModel):
    """CASH: orderId, code, total, payment. CASHLESS also carries mid and snapToken."""

    ok: bool = True
    order_id: str
    code: str
    mid: str | None = None
    total: int
    payment: PaymentOut


class OrderItemOut(CamelModel):
    product_name: str
    qty: int
    price: int
    total: int


class OrderOut(CamelModel):
    code: str
    status: OrderStatus
    total: int
    items: List[OrderItemOut]


class ConfirmOut(CamelModel):
    ok: bool = True
    already: bool | None = None


class CartItemIn(CamelModel):
    """Body of POST /cart."""

    product_id: str = Field(..., min_length=1, max_length=36, description="product id")
    qty: int = Field(..., gt=0, le=999, description="quantity to add (1-999)")


class CartLineOut(CamelModel):
    id: str
    name: str
    price: int
    image: str
    category: Category
    is_active: bool
    stock: int
    quantity: int


class CartOut(CamelModel):
    items: List[CartLineOut]
    updated_at: datetime | None = None


class OkOut(BaseModel):
    ok: bool = True
