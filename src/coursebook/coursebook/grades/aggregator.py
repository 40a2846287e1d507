from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.validators import is_number
from ..courses.model import GradeWeight
from ..users.model import GradeEntry
from .weighting.base import GradeWeighting
from .weighting.standard_weighting import StandardGradeWeighting


def split_scores(
    grades: Iterable[GradeEntry],
    grade_table: Sequence[GradeWeight],
) -> tuple[list[float], list[float]]:
    """Partition numeric scores into (checkpoint, daily) by the course's grade table.

    Scores whose assignment name is not in the table are dropped, as are
    missing or non-numeric scores.
    """
    by_name = {}
    for g in grade_table:
        by_name.setdefault(g.name, g)

    checkpoint: list[float] = []
    daily: list[float] = []
    for grade in grades:
        if not is_number(grade.score):
            continue
        weight = by_name.get(grade.name)
        if weight is None:
            continue
        (checkpoint if weight.checkpoint else daily).append(float(grade.score))
    return checkpoint, daily


def weighted_grade_average(
    checkpoint_scores: Sequence[float],
    daily_scores: Sequence[float],
    weighting: Optional[GradeWeighting] = None,
) -> float:
    weighting = weighting or StandardGradeWeighting()
    return weighting.average(list(checkpoint_scores or ()), list(daily_scores or ()))
