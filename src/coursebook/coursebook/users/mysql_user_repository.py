from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_read, db_write, fetchall, fetchone, placeholders
from .model import GradeEntry, User
from .repository import UserRepository

_COLUMNS = (
    "user_id",
    "client_id",
    "idn",
    "username",
    "first_name",
    "last_name",
    "email",
    "phone",
    "website",
    "github",
    "rocketchat",
    "codecademy",
    "zipcode",
    "is_admin",
    "is_instructor",
    "is_student",
    "credits",
    "price",
    "api_key",
)
_WRITABLE = frozenset(_COLUMNS) - {"user_id", "client_id", "idn"}
_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM users"


def _score(value: Any) -> Any:
    return float(value) if isinstance(value, Decimal) else value


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _hydrate(self, cur, rows: list[dict]) -> list[User]:
        if not rows:
            return []
        ids = [int(r["user_id"]) for r in rows]

        cur.execute(
            f"SELECT user_id, attended_at FROM user_attendance WHERE user_id IN ({placeholders(ids)}) ORDER BY attendance_id",
            tuple(ids),
        )
        attendance: dict[int, list[datetime]] = {}
        for a in fetchall(cur):
            attendance.setdefault(int(a["user_id"]), []).append(a["attended_at"])

        cur.execute(
            f"SELECT user_id, course_id, name, score FROM user_grades WHERE user_id IN ({placeholders(ids)}) ORDER BY user_grade_id",
            tuple(ids),
        )
        grades: dict[int, list[GradeEntry]] = {}
        for g in fetchall(cur):
            grades.setdefault(int(g["user_id"]), []).append(
                GradeEntry(course_id=int(g["course_id"]), name=g["name"], score=_score(g.get("score")))
            )

        out: list[User] = []
        for r in rows:
            uid = int(r["user_id"])
            out.append(
                User(
                    user_id=uid,
                    client_id=int(r["client_id"]),
                    idn=int(r["idn"]),
                    username=r["username"],
                    first_name=r.get("first_name") or "",
                    last_name=r.get("last_name") or "",
                    email=r.get("email"),
                    phone=r.get("phone"),
                    website=r.get("website"),
                    github=r.get("github"),
                    rocketchat=r.get("rocketchat"),
                    codecademy=r.get("codecademy"),
                    zipcode=r.get("zipcode"),
                    is_admin=bool(r.get("is_admin")),
                    is_instructor=bool(r.get("is_instructor")),
                    is_student=bool(r.get("is_student")),
                    credits=r.get("credits"),
                    price=float(r.get("price") or 0),
                    api_key=r.get("api_key"),
                    attendance=tuple(attendance.get(uid, ())),
                    grades=tuple(grades.get(uid, ())),
                )
            )
        return out

    def _one(self, where: str, params: tuple) -> Optional[User]:
        with db_read(self._conn_factory, "Loading user") as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where}", params)
            row = fetchone(cur)
            if not row:
                return None
            return self._hydrate(cur, [row])[0]

    def get_by_id(self, user_id: int, *, client_id: int) -> Optional[User]:
        return self._one("user_id=%s AND client_id=%s", (int(user_id), int(client_id)))

    def get_by_idn(self, idn: int, *, client_id: int) -> Optional[User]:
        return self._one("idn=%s AND client_id=%s", (int(idn), int(client_id)))

    def get_by_username(self, username: str) -> Optional[User]:
        return self._one("LOWER(username)=%s", (username.lower(),))

    def get_by_api_key(self, api_key: str) -> Optional[User]:
        return self._one("api_key=%s", (api_key,))

    def max_idn(self, client_id: int) -> Optional[int]:
        with db_read(self._conn_factory, f"Reading max idn for client {client_id}") as (_, cur):
            cur.execute("SELECT MAX(idn) AS max_idn FROM users WHERE client_id=%s", (int(client_id),))
            row = fetchone(cur)
            if not row or row.get("max_idn") is None:
                return None
            return int(row["max_idn"])

    def list_for_client(self, client_id: int) -> Sequence[User]:
        with db_read(self._conn_factory, f"Listing users for client {client_id}") as (_, cur):
            cur.execute(f"{_SELECT} WHERE client_id=%s ORDER BY last_name", (int(client_id),))
            return self._hydrate(cur, fetchall(cur))

    def list_by_ids(self, user_ids: Sequence[int], *, client_id: int) -> Sequence[User]:
        if not user_ids:
            return []
        ids = [int(i) for i in user_ids]
        with db_read(self._conn_factory, "Listing users") as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE client_id=%s AND user_id IN ({placeholders(ids)}) ORDER BY last_name",
                (int(client_id), *ids),
            )
            return self._hydrate(cur, fetchall(cur))

    def create_user(self, *, client_id: int, idn: int, username: str, fields: Mapping[str, Any]) -> User:
        values = {k: v for k, v in fields.items() if k in _WRITABLE and k != "username"}
        columns = ["client_id", "idn", "username", *values.keys()]
        params = (int(client_id), int(idn), username, *values.values())
        with db_write(self._conn_factory, f"Creating user {username!r}") as (_, cur):
            cur.execute(
                f"INSERT INTO users({', '.join(columns)}) VALUES({placeholders(columns)})",
                params,
            )
            user_id = int(cur.lastrowid)
        created = self.get_by_id(user_id, client_id=client_id)
        if created is None:
            raise PersistenceError(f"User {username!r} vanished after insert")
        return created

    def update_fields(self, user_id: int, *, client_id: int, fields: Mapping[str, Any]) -> Optional[User]:
        values = {k: v for k, v in fields.items() if k in _WRITABLE}
        if values:
            assignments = ", ".join(f"{k}=%s" for k in values)
            with db_write(self._conn_factory, f"Updating user {user_id}") as (_, cur):
                cur.execute(
                    f"UPDATE users SET {assignments} WHERE user_id=%s AND client_id=%s",
                    (*values.values(), int(user_id), int(client_id)),
                )
        return self.get_by_id(user_id, client_id=client_id)

    def replace_attendance(self, user_id: int, attendance: Sequence[datetime]) -> None:
        with db_write(self._conn_factory, f"Saving attendance for user {user_id}") as (_, cur):
            cur.execute("DELETE FROM user_attendance WHERE user_id=%s", (int(user_id),))
            if attendance:
                cur.executemany(
                    "INSERT INTO user_attendance(user_id, attended_at) VALUES(%s,%s)",
                    [(int(user_id), when) for when in attendance],
                )

    def delete_by_id(self, user_id: int, *, client_id: int) -> bool:
        with db_write(self._conn_factory, f"Removing user {user_id}") as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s AND client_id=%s", (int(user_id), int(client_id)))
            return cur.rowcount > 0
