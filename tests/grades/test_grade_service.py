from dataclasses import replace

import pytest

from coursebook.grades.service import GradeService
from coursebook.grades.weighting.standard_weighting import StandardGradeWeighting
from coursebook.users.model import GradeEntry


def test_course_grade_weights_checkpoints(student, course):
    # checkpoint: Midterm 70; daily: Quiz 1 80, Homework 1 100
    assert GradeService().course_grade(student, course) == pytest.approx(78.0)


def test_course_grade_ignores_other_courses(student, course):
    other = replace(course, course_id=200)
    assert GradeService().course_grade(student, other) == 0


def test_overall_grade_pools_courses(student, course):
    other = replace(course, course_id=200)
    student = replace(student, grades=student.grades + (GradeEntry(200, "Midterm", 90),))

    svc = GradeService(weighting=StandardGradeWeighting(checkpoint_weight=0.5, daily_weight=0.5))
    # checkpoint mean (70 + 90) / 2 = 80, daily mean 90
    assert svc.overall_grade(student, [course, other]) == pytest.approx(85.0)


def test_overall_grade_without_courses(student):
    assert GradeService().overall_grade(student, []) == 0
