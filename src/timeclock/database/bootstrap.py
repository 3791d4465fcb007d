from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional

from .connection import DatabaseConnection
from .mysql_base import db_cursor

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _valid_db_name(name: str) -> str:
    if not re.fullmatch(r"[A-Za-z0-9_]+", name):
        raise ValueError(f"Invalid database name: {name!r}")
    return name


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = _valid_db_name(conn_factory.config.database)
    with db_cursor(conn_factory, dictionary=False, with_database=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> None:
    """Create tables (idempotent: CREATE TABLE IF NOT EXISTS).

    Driver failures surface as ``Unavailable`` via :func:`db_cursor`.
    """
    ensure_database_exists(conn_factory)
    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")

    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
