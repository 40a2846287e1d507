from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str]

_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_datetime(value: DateLike) -> datetime:
    """Parse the date/time shapes attendance records arrive in.

    Accepts ``date``, ``datetime`` and strings such as ``2024-01-31``,
    ``2024-01-31 09:30`` or ISO-8601 (``2024-01-31T09:30:00Z``).
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str):
        raise TypeError(f"Unsupported date value type: {type(value)!r}")

    text = value.strip()
    for fmt in _FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_calendar_day(value: DateLike) -> Optional[date]:
    """Calendar day of a date-like value, or None when it cannot be parsed."""
    try:
        return parse_datetime(value).date()
    except (TypeError, ValueError):
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
