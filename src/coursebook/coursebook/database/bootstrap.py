from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

log = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    # The schema holds DDL only, so no ';' appears inside literals.
    for chunk in _strip_comments(sql).split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def _server_connect(target: DBConfig, *, with_database: bool):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def apply_schema(db_config: dict, *, schema_path: Path) -> None:
    """Create the database (if needed) and apply the idempotent schema file."""
    target = DBConfig.from_dict(db_config)

    conn = _server_connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4")
        cur.close()
    finally:
        conn.close()

    sql = _strip_create_db_and_use(schema_path.read_text(encoding="utf-8"))
    conn = _server_connect(target, with_database=True)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
        cur.close()
    finally:
        conn.close()
    log.info("schema applied to %s", target.database)


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _server_connect(target, with_database=True)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        tables = [row[0] for row in cur.fetchall()]
        cur.close()
        return tables
    finally:
        conn.close()
