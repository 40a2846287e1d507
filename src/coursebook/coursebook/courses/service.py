from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..core.enums import CourseTiming
from .model import Course

_WEEKDAYS = {
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tues": 1,
    "tuesday": 1,
    "wed": 2,
    "wednesday": 2,
    "thu": 3,
    "thur": 3,
    "thurs": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
    "sun": 6,
    "sunday": 6,
}


def weekday_numbers(days: Sequence[str]) -> set[int]:
    """Map weekday names (any case, short or long) to ``date.weekday()`` numbers.

    Unknown names are ignored.
    """
    out = set()
    for d in days:
        n = _WEEKDAYS.get(str(d).strip().lower())
        if n is not None:
            out.add(n)
    return out


class CourseService:
    """Schedule arithmetic over courses and terms.

    Every method takes ``now`` explicitly so results do not depend on the
    system clock.
    """

    def scheduled_dates(self, course: Course) -> list[date]:
        if not course.term:
            return []
        meets = weekday_numbers(course.days)
        if not meets:
            return []
        out = []
        day = course.term.start_date
        while day <= course.term.end_date:
            if day.weekday() in meets:
                out.append(day)
            day += timedelta(days=1)
        return out

    def past_dates(self, course: Course, *, now: datetime) -> list[date]:
        """Scheduled dates on or before ``now``."""
        today = now.date()
        return [d for d in self.scheduled_dates(course) if d <= today]

    def classify(self, course: Course, *, now: datetime) -> CourseTiming:
        if not course.term:
            return CourseTiming.FUTURE
        today = now.date()
        if today < course.term.start_date:
            return CourseTiming.FUTURE
        if today > course.term.end_date:
            return CourseTiming.PAST
        return CourseTiming.CURRENT

    def current_course(self, courses: Sequence[Course], *, now: datetime) -> Optional[Course]:
        """The running course, else the next upcoming one, else the first listed."""
        for c in courses:
            if self.classify(c, now=now) == CourseTiming.CURRENT:
                return c
        for c in courses:
            if c.term and self.classify(c, now=now) == CourseTiming.FUTURE:
                return c
        return courses[0] if courses else None
