# resto/repos/order_repo.py
from datetime import datetime

from sqlalchemy import Integer, cast, select, update, func
from sqlalchemy.orm import Session, selectinload

from resto.data.models.order import OrderModel
from resto.domain.enums import OrderStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # flush only: a duplicate code raises IntegrityError here, inside the caller's transaction
        self.db.add(order)
        self.db.flush()
        return order

    def get_by_code(self, code: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.code == code)
        ).scalar_one_or_none()

    def get_for_customer(self, code: str, customer_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.code == code, OrderModel.customer_id == customer_id)
        ).scalar_one_or_none()

    def count_created_since(self, since: datetime) -> int:
        return self.db.execute(
            select(func.count(OrderModel.id)).where(OrderModel.created_at >= since)
        ).scalar_one()

    def max_queue_value(self, code_pattern: str) -> int:
        """Highest queue number among orders whose code matches a LIKE pattern, 0 if none."""
        return self.db.execute(
            select(func.max(cast(OrderModel.queue_number, Integer))).where(OrderModel.code.like(code_pattern))
        ).scalar_one() or 0

    def mark_paid(self, order_id: str, closed_at: datetime) -> bool:
        """
        Conditional transition AWAITING_PAYMENT -> PAID.
        UPDATE ... WHERE status = 'AWAITING_PAYMENT'; a concurrent confirmation that
        committed first leaves rowcount 0 for the loser.
        """
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status == OrderStatus.AWAITING_PAYMENT.value,
            )
            .values(status=OrderStatus.PAID.value, closed_at=closed_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
