# resto/services/order_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from resto.domain.errors import OrderNotFound
from resto.repos.order_repo import OrderRepo


class OrderService:
    """Read side of orders. Writes live in CheckoutService and PaymentService."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def get_order(self, code: str, customer_id: str) -> Dict[str, Any]:
        """
        Use Case: receipt of one order (Query).
        Someone else's order looks exactly like a missing one.
        """
        order = self.repo.get_for_customer(code, customer_id)

        if not order:
            raise OrderNotFound()

        return {
            "code": order.code,
            "status": order.status,
            "total": order.total,
            "items": [
                {
                    "product_name": i.product_name,
                    "qty": i.quantity,
                    "price": i.unit_price,
                    "total": i.line_total,
                }
                for i in order.items
            ],
        }
