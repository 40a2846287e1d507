from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role flags a user can carry (a user may hold several)."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class CourseTiming(str, Enum):
    """Where a course's term sits relative to "now"."""

    PAST = "PAST"
    CURRENT = "CURRENT"
    FUTURE = "FUTURE"


class SkipReason(str, Enum):
    """Why the importer passed over a candidate."""

    MISSING_FIELDS = "MISSING_FIELDS"
    DUPLICATE_USERNAME = "DUPLICATE_USERNAME"
