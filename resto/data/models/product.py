from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime, timezone
import uuid

from resto.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)

    # smallest currency unit (rupiah), never float
    price = Column(Integer, nullable=False)
    category = Column(String(20), nullable=False)  # MAIN, APPETIZER, DRINK

    #no check constraint: unconditional confirmation may push stock below zero
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
