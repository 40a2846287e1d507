from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def get_by_id(self, course_id: int, *, client_id: int) -> Optional[Course]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Course]:
        """Courses the user is registered in, newest term first."""
        raise NotImplementedError
