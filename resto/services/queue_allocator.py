# resto/services/queue_allocator.py
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from resto.domain.checkout import format_queue_number, make_order_code
from resto.repos.counter_repo import CounterRepo
from resto.repos.order_repo import OrderRepo
from resto.utils.clock import local_now, start_of_day_utc
from resto.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class QueueTicket:
    queue_number: str
    code: str


class QueueNumberAllocator:
    """
    Daily queue numbers (001, 002, ...) and order codes ORD-YYYYMMDD-NNN.

    Must run inside the checkout transaction: the counter row stays locked
    until commit, and a rollback gives the number back, so numbers follow
    commit order without gaps.
    """

    def __init__(
        self,
        counters: CounterRepo,
        orders: OrderRepo,
        clock: Callable[[], datetime] = local_now,
    ):
        self.counters = counters
        self.orders = orders
        self.clock = clock

    def allocate(self, now: datetime | None = None) -> QueueTicket:
        now = now or self.clock()
        day = now.strftime("%Y%m%d")

        # first checkout of the day starts from the number of orders already
        # placed since local midnight
        value = self.counters.next_value(
            day,
            seed=lambda: self.orders.count_created_since(start_of_day_utc(now)),
        )

        queue_number = format_queue_number(value)
        code = make_order_code(day, queue_number)
        logger.debug(f"Allocated queue number {queue_number} ({code})")
        return QueueTicket(queue_number=queue_number, code=code)

    def resync(self, now: datetime | None = None) -> None:
        """
        Move the day's counter past every code already in the orders table.

        Called after a code collision: orders the counter never handed out
        (manual inserts, restored rows) would otherwise collide on every retry.
        Runs after the failed attempt was rolled back; the caller commits.
        """
        now = now or self.clock()
        day = now.strftime("%Y%m%d")

        highest = self.orders.max_queue_value(make_order_code(day, "%"))
        if highest:
            self.counters.raise_to(day, highest)
            logger.warning(f"Queue counter for {day} moved up to {highest}")
