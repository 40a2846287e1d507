from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Term:
    term_id: int
    name: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class GradeWeight:
    """One row of a course's grade-weight table."""

    name: str
    checkpoint: bool = False


@dataclass(frozen=True)
class Course:
    course_id: int
    client_id: int
    name: str
    days: tuple[str, ...] = ()
    term: Optional[Term] = None
    grades: tuple[GradeWeight, ...] = field(default_factory=tuple)
    registrations: frozenset[int] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "name": self.name,
            "days": list(self.days),
            "term": (
                {
                    "term_id": self.term.term_id,
                    "name": self.term.name,
                    "start_date": self.term.start_date.strftime("%Y-%m-%d"),
                    "end_date": self.term.end_date.strftime("%Y-%m-%d"),
                }
                if self.term
                else None
            ),
            "grades": [{"name": g.name, "checkpoint": g.checkpoint} for g in self.grades],
            "registrations": sorted(self.registrations),
        }
