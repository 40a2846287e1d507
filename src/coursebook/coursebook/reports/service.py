from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..attendance.service import AttendanceService
from ..core.exceptions import AuthorizationError, NotFoundError
from ..courses.repository import CourseRepository
from ..courses.service import CourseService
from ..grades.service import GradeService
from ..users.repository import UserRepository
from ..users.service import Actor


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def _avg(values: list[float]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


class ReportService:
    def __init__(
        self,
        users: UserRepository,
        courses: CourseRepository,
        *,
        attendance: AttendanceService,
        grades: Optional[GradeService] = None,
        course_service: Optional[CourseService] = None,
    ):
        self._users = users
        self._courses = courses
        self._attendance = attendance
        self._grades = grades or GradeService()
        self._course_service = course_service or CourseService()

    def build_course_report(self, actor: Actor, course_id: int, *, now: datetime) -> ReportData:
        """Attendance and grade per registered student of one course."""
        if not actor.is_staff:
            raise AuthorizationError("Only admins and instructors can view course reports")
        course = self._courses.get_by_id(int(course_id), client_id=actor.client_id)
        if not course:
            raise NotFoundError("No such course")

        students = self._users.list_by_ids(sorted(course.registrations), client_id=actor.client_id)
        rows: list[dict] = []
        for u in students:
            rows.append(
                {
                    "idn": u.idn,
                    "username": u.username,
                    "full_name": u.full_name,
                    "attendance": self._attendance.course_attendance(u, course, now=now),
                    "grade": round(self._grades.course_grade(u, course), 2),
                }
            )

        summary = {
            "course_id": course.course_id,
            "course_name": course.name,
            "timing": self._course_service.classify(course, now=now).value,
            "sessions_held": len(self._course_service.past_dates(course, now=now)),
            "students": len(rows),
            "average_attendance": _avg([r["attendance"] for r in rows]),
            "average_grade": _avg([r["grade"] for r in rows]),
        }
        return ReportData(rows=rows, summary=summary)

    def build_user_summary(self, actor: Actor, user_id: int, *, now: datetime) -> dict:
        """Overall and per-course attendance/grade for one user."""
        user = self._users.get_by_id(int(user_id), client_id=actor.client_id)
        if not user:
            raise NotFoundError("No such user")
        if not (actor.is_staff or actor.user_id == user.user_id):
            raise AuthorizationError("You cannot view this user")

        courses = list(self._courses.list_for_user(user.user_id))
        current = self._course_service.current_course(courses, now=now)
        return {
            "idn": user.idn,
            "display_name": user.display_name,
            "profile_completeness": user.profile_completeness(),
            "overall_attendance": self._attendance.overall_attendance(user, courses, now=now),
            "overall_grade": round(self._grades.overall_grade(user, courses), 2),
            "current_course": current.name if current else None,
            "courses": [
                {
                    "course_id": c.course_id,
                    "name": c.name,
                    "timing": self._course_service.classify(c, now=now).value,
                    "attendance": self._attendance.course_attendance(user, c, now=now),
                    "grade": round(self._grades.course_grade(user, c), 2),
                }
                for c in courses
            ],
        }
