# resto/utils/clock.py
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from resto.utils.settings import ORDER_TIMEZONE


def local_now() -> datetime:
    """Aware 'now' in the restaurant's timezone (queue numbers reset at local midnight)."""
    if ORDER_TIMEZONE:
        return datetime.now(ZoneInfo(ORDER_TIMEZONE))
    return datetime.now().astimezone()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day_utc(moment: datetime) -> datetime:
    #local midnight of the given day, converted to utc for db comparisons
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)
