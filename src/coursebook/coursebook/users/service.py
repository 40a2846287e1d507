from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import is_blank, normalize_username
from ..core.constants import ADMIN_ATTRIBUTES, CREATE_ATTRIBUTES, PROFILE_ATTRIBUTES
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..courses.model import Course
from ..courses.repository import CourseRepository
from .importer import ImportResult, UserImporter
from .model import User
from .repository import UserRepository

log = logging.getLogger(__name__)

_FLAG_ATTRIBUTES = ("is_admin", "is_instructor", "is_student")


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, passed explicitly into every operation."""

    user_id: int
    client_id: int
    is_admin: bool = False
    is_instructor: bool = False

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            user_id=user.user_id,
            client_id=user.client_id,
            is_admin=user.is_admin,
            is_instructor=user.is_instructor,
        )

    @property
    def is_staff(self) -> bool:
        return self.is_admin or self.is_instructor


@dataclass(frozen=True)
class UserDetail:
    user: User
    courses: tuple[Course, ...] = ()

    def to_dict(self) -> dict:
        out = self.user.to_dict()
        out["courses"] = [c.to_dict() for c in self.courses]
        return out


def _coerce(attr: str, value: Any) -> Any:
    if attr in _FLAG_ATTRIBUTES:
        return bool(value)
    return value


class UserService:
    """Use case: manage users within the caller's client."""

    def __init__(self, users: UserRepository, courses: CourseRepository, *, importer: Optional[UserImporter] = None):
        self._users = users
        self._courses = courses
        self._importer = importer or UserImporter(users)

    def resolve_actor(self, api_key: Optional[str]) -> Actor:
        if is_blank(api_key):
            raise AuthenticationError("Missing API key")
        user = self._users.get_by_api_key(api_key.strip())
        if not user:
            raise AuthenticationError("Invalid API key")
        return Actor.from_user(user)

    def list_users(self, actor: Actor) -> Sequence[User]:
        return self._users.list_for_client(actor.client_id)

    def get_user(self, actor: Actor, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id), client_id=actor.client_id)
        if not user:
            raise NotFoundError("No such user")
        return user

    def show_user(self, actor: Actor, user_id: int) -> UserDetail:
        user = self.get_user(actor, user_id)
        return UserDetail(user=user, courses=tuple(self._courses.list_for_user(user.user_id)))

    def _check_username(self, username: Any, *, exclude_user_id: Optional[int] = None) -> str:
        if is_blank(username):
            raise ValidationError("Username is required")
        username = normalize_username(username)
        existing = self._users.get_by_username(username)
        if existing and existing.user_id != exclude_user_id:
            raise ValidationError(f"Username {username!r} already exists")
        return username

    def create_user(self, actor: Actor, data: Mapping[str, Any]) -> User:
        if not actor.is_staff:
            raise AuthorizationError("Only admins and instructors can create users")

        username = self._check_username(data.get("username"))
        fields = {a: _coerce(a, data[a]) for a in CREATE_ATTRIBUTES if a in data}
        idn = (self._users.max_idn(actor.client_id) or 0) + 1

        user = self._users.create_user(client_id=actor.client_id, idn=idn, username=username, fields=fields)
        log.info("created user %r (idn=%s) in client %s", username, idn, actor.client_id)
        return user

    def update_user(self, actor: Actor, user_id: int, data: Mapping[str, Any]) -> UserDetail:
        """Partial update; keys absent from ``data`` keep their stored value."""
        user = self.get_user(actor, user_id)
        is_self = actor.user_id == user.user_id
        if not (actor.is_admin or is_self):
            raise AuthorizationError("You cannot edit this user")

        fields: dict[str, Any] = {}
        if actor.is_admin:
            for attr in ADMIN_ATTRIBUTES:
                if attr in data:
                    fields[attr] = _coerce(attr, data[attr])
            if data.get("generate_api_key"):
                fields["api_key"] = secrets.token_urlsafe(24)

        for attr in PROFILE_ATTRIBUTES:
            if attr in data:
                fields[attr] = data[attr]
        if "username" in fields:
            fields["username"] = self._check_username(fields["username"], exclude_user_id=user.user_id)

        updated = self._users.update_fields(user.user_id, client_id=actor.client_id, fields=fields)
        if not updated:
            raise NotFoundError("No such user")
        return UserDetail(user=updated, courses=tuple(self._courses.list_for_user(updated.user_id)))

    def remove_user(self, actor: Actor, user_id: int) -> None:
        if not actor.is_admin:
            raise AuthorizationError("Only admins can remove users")
        if not self._users.delete_by_id(int(user_id), client_id=actor.client_id):
            raise NotFoundError("No such user")
        log.info("removed user %s from client %s", user_id, actor.client_id)

    def import_users(self, actor: Actor, candidates: Sequence[Mapping[str, Any]]) -> ImportResult:
        if not actor.is_staff:
            raise AuthorizationError("Only admins and instructors can import users")
        if not isinstance(candidates, (list, tuple)):
            raise ValidationError("Import payload must be a list of users")
        return self._importer.import_users(actor.client_id, candidates)
