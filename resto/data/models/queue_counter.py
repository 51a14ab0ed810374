from sqlalchemy import Column, Integer, String

from resto.data.database import Base


class QueueCounterModel(Base):
    __tablename__ = "queue_counters"

    day = Column(String(8), primary_key=True)  # YYYYMMDD, local time
    last_value = Column(Integer, nullable=False)
