from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.constants import PROFILE_COMPLETENESS_ATTRIBUTES
from ..core.enums import Role


@dataclass(frozen=True)
class GradeEntry:
    """A score a user received for one assignment of one course."""

    course_id: int
    name: str
    score: Any = None


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: int
    client_id: int
    idn: int
    username: str
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    rocketchat: Optional[str] = None
    codecademy: Optional[str] = None
    zipcode: Optional[str] = None
    is_admin: bool = False
    is_instructor: bool = False
    is_student: bool = False
    credits: Optional[int] = None
    price: float = 0
    api_key: Optional[str] = None
    attendance: tuple[datetime, ...] = field(default_factory=tuple)
    grades: tuple[GradeEntry, ...] = field(default_factory=tuple)

    @property
    def full_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def roles(self) -> list[Role]:
        roles = []
        if self.is_admin:
            roles.append(Role.ADMIN)
        if self.is_instructor:
            roles.append(Role.INSTRUCTOR)
        if self.is_student:
            roles.append(Role.STUDENT)
        return roles

    def profile_completeness(self) -> int:
        """Percentage of profile fields the user has filled in."""
        filled = [a for a in PROFILE_COMPLETENESS_ATTRIBUTES if getattr(self, a)]
        return int(len(filled) / len(PROFILE_COMPLETENESS_ATTRIBUTES) * 100 + 0.5)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "client_id": self.client_id,
            "idn": self.idn,
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
            "github": self.github,
            "rocketchat": self.rocketchat,
            "codecademy": self.codecademy,
            "zipcode": self.zipcode,
            "is_admin": self.is_admin,
            "is_instructor": self.is_instructor,
            "is_student": self.is_student,
            "credits": self.credits,
            "price": self.price,
            "api_key": self.api_key,
            "roles": [r.value for r in self.roles()],
            "profile_completeness": self.profile_completeness(),
            "attendance": [d.strftime("%Y-%m-%d %H:%M") for d in self.attendance],
            "grades": [{"course_id": g.course_id, "name": g.name, "score": g.score} for g in self.grades],
        }
