# resto/domain/checkout.py
"""
Pure checkout rules: cart snapshot types, availability validation and pricing.

Everything here works on a snapshot read once from the database, so the
functions never touch a session and are trivially testable. Money is always
an int in the smallest currency unit.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence

from resto.domain.errors import InsufficientStock, ProductUnavailable


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    price: int
    stock: int
    is_active: bool
    image: str
    category: str
    quantity: int


@dataclass(frozen=True)
class CartSnapshot:
    cart_id: int | None
    updated_at: datetime | None = None
    version: int | None = None
    lines: List[CartLine] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.cart_id is None or not self.lines


@dataclass(frozen=True)
class PricedLine:
    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    line_total: int


@dataclass(frozen=True)
class Pricing:
    lines: List[PricedLine]
    subtotal: int
    discount: int
    tax: int
    total: int


def validate_availability(lines: Sequence[CartLine]) -> None:
    """Fail fast on the first inactive product or line asking for more than stock."""
    for line in lines:
        if not line.is_active:
            raise ProductUnavailable(line.name, productId=line.product_id)
        if line.quantity > line.stock:
            raise InsufficientStock(line.name, productId=line.product_id)


def percent_of(amount: int, rate_percent: int) -> int:
    #integer round half up, no floats anywhere near money
    return (amount * rate_percent + 50) // 100


def compute_pricing(lines: Sequence[CartLine], tax_rate_percent: int = 0) -> Pricing:
    priced = [
        PricedLine(
            product_id=line.product_id,
            product_name=line.name,
            quantity=line.quantity,
            unit_price=line.price,
            line_total=line.price * line.quantity,
        )
        for line in lines
    ]
    subtotal = sum(p.line_total for p in priced)
    discount = 0
    tax = percent_of(subtotal, tax_rate_percent)

    return Pricing(
        lines=priced,
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        total=subtotal - discount + tax,
    )


def format_queue_number(value: int) -> str:
    return str(value).zfill(3)


def make_order_code(day: str, queue_number: str) -> str:
    """ORD-YYYYMMDD-NNN"""
    return f"ORD-{day}-{queue_number}"


def gateway_transaction_id(code: str, order_id: str) -> str:
    return f"{code}-{order_id[:8]}"
