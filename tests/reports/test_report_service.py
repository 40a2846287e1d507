from __future__ import annotations

import pytest

from coursebook.attendance.service import AttendanceService
from coursebook.core.exceptions import AuthorizationError, NotFoundError
from coursebook.reports.service import ReportService


@pytest.fixture
def service(users_repo, courses_repo):
    return ReportService(users_repo, courses_repo, attendance=AttendanceService(users_repo))


def test_course_report_rows_and_summary(service, admin_actor, course, fixed_now):
    report = service.build_course_report(admin_actor, course.course_id, now=fixed_now)

    assert report.rows == [
        {"idn": 11, "username": "sam", "full_name": "Student, Sam", "attendance": 50, "grade": 78.0}
    ]
    assert report.summary["sessions_held"] == 4
    assert report.summary["students"] == 1
    assert report.summary["timing"] == "CURRENT"
    assert report.summary["average_grade"] == 78.0


def test_course_report_requires_staff(service, student_actor, course, fixed_now):
    with pytest.raises(AuthorizationError):
        service.build_course_report(student_actor, course.course_id, now=fixed_now)


def test_course_report_unknown_course(service, admin_actor, fixed_now):
    with pytest.raises(NotFoundError):
        service.build_course_report(admin_actor, 404, now=fixed_now)


def test_user_summary_for_self(service, student_actor, student, fixed_now):
    summary = service.build_user_summary(student_actor, student.user_id, now=fixed_now)

    assert summary["overall_attendance"] == 50
    assert summary["overall_grade"] == 78.0
    assert summary["current_course"] == "Intro to Python"
    assert summary["courses"][0]["timing"] == "CURRENT"


def test_student_cannot_view_other_summary(service, student_actor, admin, fixed_now):
    with pytest.raises(AuthorizationError):
        service.build_user_summary(student_actor, admin.user_id, now=fixed_now)
