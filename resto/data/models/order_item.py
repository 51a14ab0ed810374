from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from resto.data.database import Base


class OrderItemModel(Base):
    """Receipt line, copied from the cart snapshot and never updated."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    product_name = Column(String(200), nullable=False)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)
    line_total = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="items")
