from datetime import datetime

import pytest

from coursebook.attendance.service import AttendanceService
from coursebook.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_course_attendance_uses_past_dates(users_repo, student, course, fixed_now):
    svc = AttendanceService(users_repo)
    # Mar 4, 6, 11, 13 held so far; attended the 4th and 6th
    assert svc.course_attendance(student, course, now=fixed_now) == 50


def test_overall_attendance_without_courses_is_zero(users_repo, student, fixed_now):
    assert AttendanceService(users_repo).overall_attendance(student, [], now=fixed_now) == 0


def test_toggle_adds_and_removes_day(users_repo, admin_actor, student):
    svc = AttendanceService(users_repo)

    after = svc.toggle(admin_actor, idn=student.idn, when="2024-03-11 09:00")
    assert datetime(2024, 3, 11, 9, 0) in after
    assert len(users_repo.get_by_id(student.user_id, client_id=1).attendance) == 4

    svc.toggle(admin_actor, idn=student.idn, when="2024-03-11")
    assert users_repo.get_by_id(student.user_id, client_id=1).attendance == student.attendance


def test_toggle_requires_staff(users_repo, student_actor, student):
    with pytest.raises(AuthorizationError):
        AttendanceService(users_repo).toggle(student_actor, idn=student.idn, when="2024-03-11")


def test_toggle_unknown_idn(users_repo, admin_actor):
    with pytest.raises(NotFoundError):
        AttendanceService(users_repo).toggle(admin_actor, idn=999, when="2024-03-11")


def test_toggle_rejects_bad_date(users_repo, admin_actor, student):
    with pytest.raises(ValidationError):
        AttendanceService(users_repo).toggle(admin_actor, idn=student.idn, when="yesterday")
