from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import DateLike, parse_datetime
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..courses.model import Course
from ..courses.service import CourseService
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import Actor
from .calculator import attendance_average, toggle_attendance

log = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, users: UserRepository, *, course_service: CourseService | None = None):
        self._users = users
        self._courses = course_service or CourseService()

    def toggle(self, actor: Actor, *, idn: int, when: DateLike) -> list[datetime]:
        """Mark or unmark a student's attendance for ``when``'s calendar day."""
        if not (actor.is_admin or actor.is_instructor):
            raise AuthorizationError("Only admins and instructors can record attendance")
        try:
            parse_datetime(when)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid attendance date: {when!r}")

        user = self._users.get_by_idn(int(idn), client_id=actor.client_id)
        if not user:
            raise NotFoundError("No such user")

        attendance = toggle_attendance(user.attendance, when)
        self._users.replace_attendance(user.user_id, attendance)
        log.info("attendance for idn=%s now has %d records", user.idn, len(attendance))
        return attendance

    def course_attendance(self, user: User, course: Course, *, now: datetime) -> int:
        past = self._courses.past_dates(course, now=now)
        return attendance_average(past, user.attendance)

    def overall_attendance(self, user: User, courses: Sequence[Course], *, now: datetime) -> int:
        past = []
        for c in courses:
            past.extend(self._courses.past_dates(c, now=now))
        return attendance_average(past, user.attendance)
