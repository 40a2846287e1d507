from __future__ import annotations

from typing import Optional, Sequence

from ..courses.model import Course
from ..users.model import User
from .aggregator import split_scores, weighted_grade_average
from .weighting.base import GradeWeighting
from .weighting.standard_weighting import StandardGradeWeighting


class GradeService:
    def __init__(self, *, weighting: Optional[GradeWeighting] = None):
        self._weighting = weighting or StandardGradeWeighting()

    def course_grade(self, user: User, course: Course) -> float:
        grades = [g for g in user.grades if g.course_id == course.course_id]
        checkpoint, daily = split_scores(grades, course.grades)
        return weighted_grade_average(checkpoint, daily, self._weighting)

    def overall_grade(self, user: User, courses: Sequence[Course]) -> float:
        """Weighted average across every course; grades of unknown courses are ignored."""
        by_id = {c.course_id: c for c in courses}
        checkpoint: list[float] = []
        daily: list[float] = []
        for grade in user.grades:
            course = by_id.get(grade.course_id)
            if not course:
                continue
            cp, dl = split_scores([grade], course.grades)
            checkpoint.extend(cp)
            daily.extend(dl)
        return weighted_grade_average(checkpoint, daily, self._weighting)
