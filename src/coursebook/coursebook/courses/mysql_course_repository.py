from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_read, fetchall, fetchone, placeholders
from .model import Course, GradeWeight, Term
from .repository import CourseRepository

_SELECT = """
    SELECT c.course_id, c.client_id, c.name, c.days,
           t.term_id, t.name AS term_name, t.start_date, t.end_date
    FROM courses c
    LEFT JOIN terms t ON t.term_id = c.term_id
"""


def _split_days(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(d.strip() for d in value.split(",") if d.strip())


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _hydrate(self, cur, rows: list[dict]) -> list[Course]:
        if not rows:
            return []
        ids = [int(r["course_id"]) for r in rows]

        cur.execute(
            f"SELECT course_id, name, checkpoint FROM course_grades WHERE course_id IN ({placeholders(ids)}) ORDER BY course_grade_id",
            tuple(ids),
        )
        grades: dict[int, list[GradeWeight]] = {}
        for g in fetchall(cur):
            grades.setdefault(int(g["course_id"]), []).append(GradeWeight(name=g["name"], checkpoint=bool(g["checkpoint"])))

        cur.execute(
            f"SELECT course_id, user_id FROM course_registrations WHERE course_id IN ({placeholders(ids)})",
            tuple(ids),
        )
        registrations: dict[int, set[int]] = {}
        for reg in fetchall(cur):
            registrations.setdefault(int(reg["course_id"]), set()).add(int(reg["user_id"]))

        out: list[Course] = []
        for r in rows:
            cid = int(r["course_id"])
            term = None
            if r.get("term_id") is not None:
                term = Term(
                    term_id=int(r["term_id"]),
                    name=r["term_name"],
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                )
            out.append(
                Course(
                    course_id=cid,
                    client_id=int(r["client_id"]),
                    name=r["name"],
                    days=_split_days(r.get("days")),
                    term=term,
                    grades=tuple(grades.get(cid, ())),
                    registrations=frozenset(registrations.get(cid, ())),
                )
            )
        return out

    def get_by_id(self, course_id: int, *, client_id: int) -> Optional[Course]:
        with db_read(self._conn_factory, f"Loading course {course_id}") as (_, cur):
            cur.execute(f"{_SELECT} WHERE c.course_id=%s AND c.client_id=%s", (int(course_id), int(client_id)))
            row = fetchone(cur)
            if not row:
                return None
            return self._hydrate(cur, [row])[0]

    def list_for_user(self, user_id: int) -> Sequence[Course]:
        with db_read(self._conn_factory, f"Listing courses for user {user_id}") as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                JOIN course_registrations r ON r.course_id = c.course_id
                WHERE r.user_id=%s
                ORDER BY t.start_date DESC, c.course_id DESC
                """,
                (int(user_id),),
            )
            return self._hydrate(cur, fetchall(cur))
