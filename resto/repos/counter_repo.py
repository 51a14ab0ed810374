# resto/repos/counter_repo.py
from typing import Callable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from resto.data.models.queue_counter import QueueCounterModel


class CounterRepo:
    def __init__(self, db: Session):
        self.db = db

    def next_value(self, day: str, seed: Callable[[], int]) -> int:
        """
        Atomically bump the per-day counter and return the new value.

        The UPDATE takes the row lock until the surrounding transaction ends, so
        concurrent checkouts queue up behind each other instead of reading the same
        value. First order of the day inserts the row, starting after `seed()`;
        two racing inserts hit the primary key and the loser is retried upstream.
        """
        rowcount = self.db.execute(
            update(QueueCounterModel)
            .where(QueueCounterModel.day == day)
            .values(last_value=QueueCounterModel.last_value + 1)
            .execution_options(synchronize_session=False)
        ).rowcount

        if rowcount == 0:
            self.db.add(QueueCounterModel(day=day, last_value=seed() + 1))
            self.db.flush()

        return self.db.execute(
            select(QueueCounterModel.last_value).where(QueueCounterModel.day == day)
        ).scalar_one()

    def raise_to(self, day: str, value: int) -> None:
        """Move the day's counter up to `value`; never moves it down."""
        rowcount = self.db.execute(
            update(QueueCounterModel)
            .where(QueueCounterModel.day == day, QueueCounterModel.last_value < value)
            .values(last_value=value)
            .execution_options(synchronize_session=False)
        ).rowcount

        if rowcount == 0 and self.db.get(QueueCounterModel, day) is None:
            self.db.add(QueueCounterModel(day=day, last_value=value))
            self.db.flush()
