from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class GradeWeighting(ABC):
    """Weighting interface (Strategy Pattern for overall grades)."""

    @abstractmethod
    def average(self, checkpoint_scores: Sequence[float], daily_scores: Sequence[float]) -> float:
        raise NotImplementedError
