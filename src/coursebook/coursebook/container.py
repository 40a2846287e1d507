from __future__ import annotations

from dataclasses import dataclass

from .attendance.service import AttendanceService
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .grades.service import GradeService
from .grades.weighting.base import GradeWeighting
from .grades.weighting.standard_weighting import StandardGradeWeighting
from .reports.service import ReportService
from .users.importer import UserImporter
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: MySQLUserRepository
    courses_repo: MySQLCourseRepository

    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService


def build_services(users_repo, courses_repo, *, weighting: GradeWeighting) -> dict:
    """Wire the service layer over any pair of repositories."""
    course_service = CourseService()
    attendance_service = AttendanceService(users_repo, course_service=course_service)
    return dict(
        user_service=UserService(users_repo, courses_repo, importer=UserImporter(users_repo)),
        attendance_service=attendance_service,
        report_service=ReportService(
            users_repo,
            courses_repo,
            attendance=attendance_service,
            grades=GradeService(weighting=weighting),
            course_service=course_service,
        ),
    )


def build_container(*, db_config: dict, checkpoint_weight: float, daily_weight: float) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    courses_repo = MySQLCourseRepository(conn)
    weighting = StandardGradeWeighting(checkpoint_weight=checkpoint_weight, daily_weight=daily_weight)

    return Container(
        users_repo=users_repo,
        courses_repo=courses_repo,
        **build_services(users_repo, courses_repo, weighting=weighting),
    )
