from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Identity
from .repository import UserRepository

_COLUMNS = "user_id, full_name, phone, role, pin_hash"


def _row_to_identity(row: dict) -> Identity:
    return Identity(
        id=int(row["user_id"]),
        name=row["full_name"],
        phone=row["phone"],
        role=Role(row["role"]),
        pin_hash=row["pin_hash"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_identity(row) if row else None

    def get_by_phone(self, phone: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            # BINARY: exact match, no collation folding.
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE phone = BINARY %s", (phone,))
            row = fetchone(cur)
            return _row_to_identity(row) if row else None

    def list_all(self) -> Sequence[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id")
            return [_row_to_identity(r) for r in fetchall(cur)]

    def upsert(self, *, user_id: int, name: str, phone: str, role: Role, pin_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, full_name, phone, role, pin_hash)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), phone=VALUES(phone),
                    role=VALUES(role), pin_hash=VALUES(pin_hash)
                """,
                (int(user_id), name, phone, role.value, pin_hash),
            )
