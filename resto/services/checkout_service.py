# resto/services/checkout_service.py
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resto.data.models.order import OrderModel
from resto.data.models.order_item import OrderItemModel
from resto.domain.checkout import compute_pricing, gateway_transaction_id, validate_availability
from resto.domain.enums import DiningType, OrderStatus, PaymentChoice
from resto.domain.errors import CashOrder, EmptyCart, GatewayMisconfigured, GatewayUnavailable, OrderAlreadyPaid, OrderNotFound, TransientConflict
from resto.repos.cart_repo import CartRepo
from resto.repos.counter_repo import CounterRepo
from resto.repos.order_repo import OrderRepo
from resto.services.notification_service import NotificationService
from resto.services.payment_gateway import MidtransSnapGateway
from resto.services.queue_allocator import QueueNumberAllocator
from resto.utils.clock import local_now
from resto.utils.retry import conflict_retry
from resto.utils.settings import TAX_RATE_PERCENT
from resto.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    order_id: str
    code: str
    queue_number: str
    total: int
    payment_method: str
    mid: str | None = None
    snap_token: str | None = None


class CheckoutService:
    """
    Use Case: cart -> order.

    1. snapshot the cart with current product price/stock/active flag
    2. validate availability (fail fast, nothing written yet)
    3. price it from the snapshot
    4. claim the cart version, so a cart edited since the snapshot is not deleted unpriced
    5. allocate queue number + code
    6. insert order + order items, delete the cart, commit, all in one transaction
    7. CASHLESS only: ask the gateway for a snap token

    A stale cart version in step 4 or a unique violation in step 6 rolls the
    whole unit back and runs it again; after a code collision the day counter
    is first moved past the codes already taken.
    """

    def __init__(
        self,
        db: Session,
        gateway: MidtransSnapGateway,
        notifier: NotificationService | None = None,
        tax_rate_percent: int = TAX_RATE_PERCENT,
        clock: Callable[[], datetime] = local_now,
    ):
        self.db = db
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db)
        self.allocator = QueueNumberAllocator(CounterRepo(db), self.orders, clock=clock)
        self.gateway = gateway
        self.notifier = notifier or NotificationService()
        self.tax_rate_percent = tax_rate_percent
        self.clock = clock

    def checkout(self, customer_id: str, dining_type: DiningType, payment_choice: PaymentChoice) -> CheckoutResult:
        placed = self.place_order(customer_id, dining_type, payment_choice)

        self.notifier.order_placed(customer_id, placed.code, placed.queue_number)

        if payment_choice == PaymentChoice.CASH:
            return placed

        # order is committed at this point; a gateway failure leaves it
        # AWAITING_PAYMENT and the customer can ask for a new token later
        try:
            return self._attach_payment_token(placed)
        except (GatewayMisconfigured, GatewayUnavailable):
            logger.error(f"[Order: {placed.code}] Payment token failed, order stays {OrderStatus.AWAITING_PAYMENT.value}")
            raise

    @conflict_retry()
    def place_order(self, customer_id: str, dining_type: DiningType, payment_choice: PaymentChoice) -> CheckoutResult:
        """The atomic part of checkout, re-run on TransientConflict."""
        now = self.clock()
        try:
            snapshot = self.carts.load_snapshot(customer_id)
            if snapshot.is_empty:
                raise EmptyCart()

            validate_availability(snapshot.lines)
            pricing = compute_pricing(snapshot.lines, self.tax_rate_percent)

            # the cart must still be the one just priced; a line added in the
            # meantime bumped the version and this attempt starts over
            if not self.carts.claim_version(snapshot.cart_id, snapshot.version):
                logger.warning(f"Cart {snapshot.cart_id} of customer {customer_id} changed during checkout, retrying")
                raise TransientConflict()

            ticket = self.allocator.allocate(now)

            order = self.orders.add_order(
                OrderModel(
                    code=ticket.code,
                    queue_number=ticket.queue_number,
                    customer_id=customer_id,
                    dining_type=DiningType(dining_type).value,
                    payment_method=PaymentChoice(payment_choice).value,
                    status=OrderStatus.AWAITING_PAYMENT.value,
                    subtotal=pricing.subtotal,
                    discount=pricing.discount,
                    tax=pricing.tax,
                    total=pricing.total,
                    created_at=now.astimezone(timezone.utc),
                    items=[
                        OrderItemModel(
                            product_id=line.product_id,
                            product_name=line.product_name,
                            quantity=line.quantity,
                            unit_price=line.unit_price,
                            line_total=line.line_total,
                        )
                        for line in pricing.lines
                    ],
                )
            )

            self.carts.delete_cart(snapshot.cart_id)

            result = CheckoutResult(
                order_id=order.id,
                code=order.code,
                queue_number=order.queue_number,
                total=order.total,
                payment_method=order.payment_method,
            )
            self.db.commit()

        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Order code conflict for customer {customer_id}, retrying: {e.orig}")
            self._resync_counter(now)
            raise TransientConflict() from e
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"[Order: {result.code}] Created for customer {customer_id}, "
            f"queue {result.queue_number}, total {result.total}, {result.payment_method}"
        )
        return result

    def resume_payment(self, customer_id: str, code: str) -> CheckoutResult:
        """
        Use Case: new snap token for an order whose payment never started
        (gateway down at checkout, popup closed, ...).
        """
        order = self.orders.get_for_customer(code, customer_id)
        if not order:
            raise OrderNotFound()

        if order.status == OrderStatus.PAID.value:
            raise OrderAlreadyPaid()

        if order.payment_method != PaymentChoice.CASHLESS.value:
            raise CashOrder()

        placed = CheckoutResult(
            order_id=order.id,
            code=order.code,
            queue_number=order.queue_number,
            total=order.total,
            payment_method=order.payment_method,
        )
        self.db.rollback()  # read only, release the snapshot

        return self._attach_payment_token(placed)

    def _attach_payment_token(self, placed: CheckoutResult) -> CheckoutResult:
        mid = gateway_transaction_id(placed.code, placed.order_id)
        token = self.gateway.create_transaction_token(
            transaction_id=mid,
            amount=placed.total,
            order_id=placed.order_id,
            code=placed.code,
        )
        return replace(placed, mid=mid, snap_token=token)

    def _resync_counter(self, now: datetime) -> None:
        # a collision with a code the counter never handed out repeats on every
        # retry unless the counter moves past it outside the failed attempt
        try:
            self.allocator.resync(now)
            self.db.commit()
        except IntegrityError as e:
            # another checkout created the day's counter row first; the retry reads it
            self.db.rollback()
            logger.warning(f"Queue counter resync skipped: {e.orig}")
