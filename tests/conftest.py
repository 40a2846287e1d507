from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

import pytest

from coursebook.core.exceptions import PersistenceError
from coursebook.courses.model import Course, GradeWeight, Term
from coursebook.users.model import GradeEntry, User
from coursebook.users.service import Actor


class InMemoryUsers:
    """Dict-backed UserRepository.

    ``fail_on`` makes create_user raise for those usernames; ``fail_lookup_on``
    does the same for get_by_username.
    """

    def __init__(self, users: Sequence[User] = (), *, fail_on: Sequence[str] = (), fail_lookup_on: Sequence[str] = ()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._by_id, default=0) + 1
        self.fail_lookup_on = set(fail_lookup_on)
        self.fail_on = set(fail_on)
        self.created: list[str] = []
        self.calls: list[str] = []

    def get_by_id(self, user_id: int, *, client_id: int) -> Optional[User]:
        u = self._by_id.get(user_id)
        return u if u and u.client_id == client_id else None

    def get_by_idn(self, idn: int, *, client_id: int) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.idn == idn and u.client_id == client_id), None)

    def get_by_username(self, username: str) -> Optional[User]:
        self.calls.append(f"get_by_username:{username}")
        if username in self.fail_lookup_on:
            raise PersistenceError(f"Loading user failed: lost connection looking up {username}")
        return next((u for u in self._by_id.values() if u.username.lower() == username.lower()), None)

    def get_by_api_key(self, api_key: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.api_key == api_key), None)

    def max_idn(self, client_id: int) -> Optional[int]:
        self.calls.append("max_idn")
        idns = [u.idn for u in self._by_id.values() if u.client_id == client_id]
        return max(idns) if idns else None

    def list_for_client(self, client_id: int) -> Sequence[User]:
        return sorted((u for u in self._by_id.values() if u.client_id == client_id), key=lambda u: u.last_name)

    def list_by_ids(self, user_ids: Sequence[int], *, client_id: int) -> Sequence[User]:
        return [u for u in self.list_for_client(client_id) if u.user_id in set(user_ids)]

    def create_user(self, *, client_id: int, idn: int, username: str, fields: Mapping[str, Any]) -> User:
        if username in self.fail_on:
            raise PersistenceError(f"duplicate key for {username}")
        user = User(user_id=self._next_id, client_id=client_id, idn=idn, username=username, **dict(fields))
        self._by_id[user.user_id] = user
        self._next_id += 1
        self.created.append(username)
        return user

    def update_fields(self, user_id: int, *, client_id: int, fields: Mapping[str, Any]) -> Optional[User]:
        user = self.get_by_id(user_id, client_id=client_id)
        if not user:
            return None
        user = replace(user, **dict(fields))
        self._by_id[user_id] = user
        return user

    def replace_attendance(self, user_id: int, attendance: Sequence[datetime]) -> None:
        self._by_id[user_id] = replace(self._by_id[user_id], attendance=tuple(attendance))

    def delete_by_id(self, user_id: int, *, client_id: int) -> bool:
        if self.get_by_id(user_id, client_id=client_id):
            del self._by_id[user_id]
            return True
        return False


class InMemoryCourses:
    def __init__(self, courses: Sequence[Course] = ()):
        self._courses = list(courses)

    def get_by_id(self, course_id: int, *, client_id: int) -> Optional[Course]:
        return next((c for c in self._courses if c.course_id == course_id and c.client_id == client_id), None)

    def list_for_user(self, user_id: int) -> Sequence[Course]:
        return [c for c in self._courses if user_id in c.registrations]


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday
    return datetime(2024, 3, 13, 10, 0, 0)


@pytest.fixture
def admin() -> User:
    return User(
        user_id=1,
        client_id=1,
        idn=10,
        username="admin@school.test",
        first_name="Ada",
        last_name="Admin",
        is_admin=True,
        api_key="admin-key",
    )


@pytest.fixture
def student() -> User:
    return User(
        user_id=2,
        client_id=1,
        idn=11,
        username="sam",
        first_name="Sam",
        last_name="Student",
        is_student=True,
        api_key="student-key",
        attendance=(datetime(2024, 3, 4, 9, 5), datetime(2024, 3, 6, 9, 0), datetime(2024, 3, 6, 13, 0)),
        grades=(
            GradeEntry(course_id=100, name="Quiz 1", score=80),
            GradeEntry(course_id=100, name="Homework 1", score=100),
            GradeEntry(course_id=100, name="Midterm", score=70),
            GradeEntry(course_id=100, name="Extra credit", score=100),
            GradeEntry(course_id=100, name="Homework 2", score=None),
        ),
    )


@pytest.fixture
def course() -> Course:
    # Meets Mon/Wed; the term began Monday 2024-03-04
    return Course(
        course_id=100,
        client_id=1,
        name="Intro to Python",
        days=("Monday", "Wednesday"),
        term=Term(term_id=7, name="Spring", start_date=date(2024, 3, 4), end_date=date(2024, 5, 31)),
        grades=(
            GradeWeight(name="Quiz 1"),
            GradeWeight(name="Homework 1"),
            GradeWeight(name="Homework 2"),
            GradeWeight(name="Midterm", checkpoint=True),
        ),
        registrations=frozenset({2}),
    )


@pytest.fixture
def users_repo(admin, student) -> InMemoryUsers:
    return InMemoryUsers([admin, student])


@pytest.fixture
def courses_repo(course) -> InMemoryCourses:
    return InMemoryCourses([course])


@pytest.fixture
def admin_actor(admin) -> Actor:
    return Actor.from_user(admin)


@pytest.fixture
def student_actor(student) -> Actor:
    return Actor.from_user(student)


@pytest.fixture
def make_users_repo():
    return InMemoryUsers
