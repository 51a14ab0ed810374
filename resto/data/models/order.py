from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from resto.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(32), nullable=False, unique=True)  # ORD-YYYYMMDD-NNN
    queue_number = Column(String(8), nullable=False)

    customer_id = Column(String(64), nullable=False, index=True)
    dining_type = Column(String(20), nullable=False)  # DINE_IN, TAKE_AWAY
    payment_method = Column(String(20), nullable=False)  # CASH, CASHLESS
    status = Column(String(20), nullable=False, default="AWAITING_PAYMENT")  # AWAITING_PAYMENT, PAID

    #locked at checkout, never recomputed
    subtotal = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    tax = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True, default=lambda: datetime.now(timezone.utc))
    closed_at = Column(DateTime(timezone=True), nullable=True)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )
