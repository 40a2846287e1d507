"""Attendance arithmetic.

Pure functions: no storage access and no exceptions for odd input. Values
that cannot be read as a date are ignored.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, parse_datetime, to_calendar_day


def _days(values: Iterable[DateLike]) -> set[date]:
    out = set()
    for v in values or ():
        day = to_calendar_day(v)
        if day is not None:
            out.add(day)
    return out


def attendance_average(attended_dates: Iterable[DateLike], recorded_attendance: Iterable[DateLike]) -> int:
    """Percentage (0-100) of ``attended_dates`` found in ``recorded_attendance``.

    ``attended_dates`` are the days the student was expected (the
    denominator). Recorded timestamps are compared by calendar day and both
    sides are deduplicated. An empty denominator yields 0.
    """
    expected = _days(attended_dates)
    if not expected:
        return 0
    present = _days(recorded_attendance)
    ratio = len(expected & present) / len(expected)
    # half-up, not banker's rounding
    return int(ratio * 100 + 0.5)


def find_same_day(recorded: Iterable[DateLike], when: DateLike) -> Optional[int]:
    """Index of the first record on the same calendar day as ``when``."""
    target = to_calendar_day(when)
    if target is None:
        return None
    for i, value in enumerate(recorded):
        if to_calendar_day(value) == target:
            return i
    return None


def toggle_attendance(recorded: Iterable[datetime], when: DateLike) -> list[datetime]:
    """Unmark ``when``'s day if already recorded, otherwise mark it present.

    Returns a new list; ``recorded`` is not modified.
    """
    out = list(recorded or ())
    idx = find_same_day(out, when)
    if idx is not None:
        del out[idx]
    else:
        out.append(parse_datetime(when))
    return out
