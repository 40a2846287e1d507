from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def db_write(conn_factory: DatabaseConnection, action: str):
    """Like db_cursor, but connector failures surface as PersistenceError."""
    try:
        with db_cursor(conn_factory) as pair:
            yield pair
    except mysql.connector.Error as e:
        raise PersistenceError(f"{action} failed: {e}") from e


def db_read(conn_factory: DatabaseConnection, action: str):
    """Read-side twin of db_write."""
    return db_write(conn_factory, action)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(values) -> str:
    return ",".join(["%s"] * len(values))
