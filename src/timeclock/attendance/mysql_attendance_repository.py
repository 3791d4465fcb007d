from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import as_utc
from ..core.exceptions import AlreadyClockedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, Coordinates
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, user_id, project_id, in_time, out_time,
    in_latitude, in_longitude, out_latitude, out_longitude
"""


def _naive_utc(value: datetime) -> datetime:
    # DATETIME columns hold naive UTC.
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _row_to_record(r: dict) -> AttendanceRecord:
    out_time = r.get("out_time")
    return AttendanceRecord(
        id=r["record_id"],
        user_id=int(r["user_id"]),
        project_id=int(r["project_id"]),
        in_time=as_utc(r["in_time"]),
        in_coordinates=Coordinates(latitude=float(r["in_latitude"]), longitude=float(r["in_longitude"])),
        out_time=as_utc(out_time) if out_time is not None else None,
        out_coordinates=(
            Coordinates(latitude=float(r["out_latitude"]), longitude=float(r["out_longitude"]))
            if r.get("out_latitude") is not None
            else None
        ),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Durable store.

    The ``open_user_id`` generated column carries a UNIQUE index, so the
    database rejects a second open record per user even across processes.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find_open_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND out_time IS NULL
                """,
                (int(user_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        record_id, user_id, project_id, in_time, in_latitude, in_longitude
                    )
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.id,
                        record.user_id,
                        record.project_id,
                        _naive_utc(record.in_time),
                        record.in_coordinates.latitude,
                        record.in_coordinates.longitude,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            raise AlreadyClockedIn() from e

    def close(
        self,
        *,
        record_id: str,
        user_id: int,
        out_time: datetime,
        out_coordinates: Coordinates,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET out_time=%s, out_latitude=%s, out_longitude=%s
                WHERE record_id=%s AND user_id=%s AND out_time IS NULL
                """,
                (
                    _naive_utc(out_time),
                    out_coordinates.latitude,
                    out_coordinates.longitude,
                    record_id,
                    int(user_id),
                ),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            return _row_to_record(fetchone(cur))

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY in_time DESC")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY in_time DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
