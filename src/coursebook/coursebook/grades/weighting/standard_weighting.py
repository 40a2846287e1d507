from __future__ import annotations

import math
from typing import Sequence

from ...core.constants import DEFAULT_CHECKPOINT_WEIGHT, DEFAULT_DAILY_WEIGHT
from ...core.exceptions import ValidationError
from .base import GradeWeighting


def _mean(scores: Sequence[float]) -> float:
    return sum(scores) / len(scores)


class StandardGradeWeighting(GradeWeighting):
    """Standard rule: checkpoint mean and daily mean blended by fixed weights.

    With only one category present its plain mean is returned; with none, 0.
    """

    def __init__(self, checkpoint_weight: float = DEFAULT_CHECKPOINT_WEIGHT, daily_weight: float = DEFAULT_DAILY_WEIGHT):
        checkpoint_weight = float(checkpoint_weight)
        daily_weight = float(daily_weight)
        for name, w in (("checkpoint_weight", checkpoint_weight), ("daily_weight", daily_weight)):
            if not 0 <= w <= 1:
                raise ValidationError(f"{name} must be between 0 and 1")
        if not math.isclose(checkpoint_weight + daily_weight, 1.0, abs_tol=1e-9):
            raise ValidationError("checkpoint_weight and daily_weight must sum to 1")
        self.checkpoint_weight = checkpoint_weight
        self.daily_weight = daily_weight

    def average(self, checkpoint_scores: Sequence[float], daily_scores: Sequence[float]) -> float:
        if checkpoint_scores and daily_scores:
            return _mean(checkpoint_scores) * self.checkpoint_weight + _mean(daily_scores) * self.daily_weight
        if checkpoint_scores:
            return _mean(checkpoint_scores)
        if daily_scores:
            return _mean(daily_scores)
        return 0.0
