"""
Timestamp helpers shared by the aggregators.

Stored order dates are either BSON dates or date strings. Everything is
compared as timezone-aware UTC; zone-less values are taken to be UTC.
"""

from datetime import date, datetime, time, timezone
from typing import Union

from src.analytics.errors import InvalidDateFormat

DateLike = Union[str, date, datetime]


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: DateLike) -> datetime:
    """
    Parse a date boundary or stored order date.

    Accepts datetimes, dates (midnight UTC) and ISO-8601 strings, with or
    without a time part and with an optional `Z` suffix.

    Raises:
        InvalidDateFormat: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.strip()))
        except ValueError:
            raise InvalidDateFormat(value) from None
    raise InvalidDateFormat(value)


def to_iso_string(value: datetime) -> str:
    """Format as `YYYY-MM-DDTHH:MM:SS.mmmZ` (millisecond precision, UTC)"""
    value = ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"
