# resto/services/payment_service.py
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from resto.domain.enums import OrderStatus
from resto.domain.errors import InsufficientStock, OrderNotFound
from resto.repos.order_repo import OrderRepo
from resto.repos.product_repo import ProductRepo
from resto.services.notification_service import NotificationService
from resto.utils.clock import utc_now
from resto.utils.settings import STRICT_STOCK_ON_CONFIRM
from resto.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConfirmResult:
    code: str
    already: bool


class PaymentService:
    """
    AWAITING_PAYMENT -> PAID, exactly once per order.

    Triggered by the cashier (cash) or by the gateway callback (cashless).
    The status transition and the stock decrements commit together; duplicate
    calls, sequential or concurrent, report `already` and touch nothing.
    """

    def __init__(
        self,
        db: Session,
        notifier: NotificationService | None = None,
        strict_stock: bool = STRICT_STOCK_ON_CONFIRM,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.notifier = notifier or NotificationService()
        self.strict_stock = strict_stock
        self.clock = clock

    def confirm_payment(self, code: str) -> ConfirmResult:
        try:
            order = self.orders.get_by_code(code)
            if not order:
                raise OrderNotFound()

            if order.status == OrderStatus.PAID.value:
                self.db.rollback()
                logger.info(f"[Order: {code}] Already paid, nothing to do")
                return ConfirmResult(code=code, already=True)

            # status check and write in one statement, inside this transaction;
            # whoever flips it first owns the stock decrement
            if not self.orders.mark_paid(order.id, self.clock()):
                self.db.rollback()
                logger.info(f"[Order: {code}] Confirmed concurrently by another request")
                return ConfirmResult(code=code, already=True)

            # fixed product order so concurrent confirmations lock rows the same way
            for item in sorted(order.items, key=lambda i: i.product_id):
                applied = self.products.decrement_stock(
                    item.product_id,
                    item.quantity,
                    require_available=self.strict_stock,
                )
                if not applied:
                    raise InsufficientStock(item.product_name, productId=item.product_id)

            customer_id, queue_number, line_count = order.customer_id, order.queue_number, len(order.items)
            self.db.commit()

        except Exception:
            self.db.rollback()
            raise

        logger.info(f"[Order: {code}] Marked {OrderStatus.PAID.value}, stock decremented for {line_count} line(s)")
        self.notifier.order_paid(customer_id, code, queue_number)

        return ConfirmResult(code=code, already=False)
