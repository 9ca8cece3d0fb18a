"""Business time zone helpers.

Timestamps are stored in UTC; reports bucket them by calendar date and
hour in the business time zone.
"""

from datetime import datetime

import pytz

from qrmenu.config import settings


def get_business_tz(name: str | None = None) -> pytz.BaseTzInfo:
    """Resolve the configured business time zone."""
    return pytz.timezone(name or settings.business_timezone)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (as read back from SQLite)."""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def to_business_tz(dt: datetime, tz: pytz.BaseTzInfo | None = None) -> datetime:
    """Convert a datetime to the business time zone; naive means UTC."""
    return ensure_utc(dt).astimezone(tz or get_business_tz())


def business_now(tz: pytz.BaseTzInfo | None = None) -> datetime:
    """Current time in the business time zone."""
    return datetime.now(tz or get_business_tz())


def start_of_day(dt: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Midnight of ``dt``'s calendar day in ``tz``."""
    local = to_business_tz(dt, tz)
    return tz.localize(datetime(local.year, local.month, local.day))


def start_of_month(dt: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Midnight of the first day of ``dt``'s month in ``tz``."""
    local = to_business_tz(dt, tz)
    return tz.localize(datetime(local.year, local.month, 1))
