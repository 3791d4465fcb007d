from __future__ import annotations

from datetime import datetime, timezone

import mysql.connector
import pytest

from timeclock.attendance.model import AttendanceRecord, Coordinates
from timeclock.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from timeclock.core.enums import Role
from timeclock.core.exceptions import AlreadyClockedIn, Unavailable
from timeclock.database.bootstrap import SCHEMA_PATH, _iter_sql_statements, apply_schema, list_tables
from timeclock.database.connection import DBConfig
from timeclock.users.mysql_user_repository import MySQLUserRepository

IN_TIME = datetime(2026, 2, 1, 8, 0, tzinfo=timezone.utc)


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, rows=None, rowcount=1, fail_with=None):
        self.rows = rows or []
        self.rowcount = rowcount
        self.fail_with = fail_with
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, connect_error=None, database="timeclock_test"):
        self.conn = conn
        self.connect_error = connect_error
        self.config = DBConfig.from_dict({"database": database})

    def connect(self, *, with_database=True):
        if self.connect_error is not None:
            raise self.connect_error
        return self.conn


def _record():
    return AttendanceRecord(
        id="rec_1_abc",
        user_id=1,
        project_id=101,
        in_time=IN_TIME,
        in_coordinates=Coordinates(latitude=1.5, longitude=2.5),
    )


def test_create_stores_naive_utc():
    conn = FakeConnection()

    MySQLAttendanceRepository(FakeFactory(conn)).create(_record())

    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO attendance_records")
    assert params[3] == datetime(2026, 2, 1, 8, 0)
    assert conn.committed and conn.closed


def test_duplicate_open_record_maps_to_already_clocked_in():
    conn = FakeConnection(fail_with=mysql.connector.IntegrityError(msg="Duplicate entry for uq_attendance_open_user"))

    with pytest.raises(AlreadyClockedIn):
        MySQLAttendanceRepository(FakeFactory(conn)).create(_record())

    assert conn.rolled_back and not conn.committed


def test_driver_error_is_unavailable():
    conn = FakeConnection(fail_with=mysql.connector.OperationalError(msg="lost connection"))

    with pytest.raises(Unavailable):
        MySQLAttendanceRepository(FakeFactory(conn)).list_all()

    assert conn.rolled_back and conn.closed


def test_connect_failure_is_unavailable():
    factory = FakeFactory(connect_error=mysql.connector.InterfaceError(msg="refused"))

    with pytest.raises(Unavailable):
        MySQLAttendanceRepository(factory).get_by_id("rec_1_abc")


def test_close_without_matching_open_row_returns_none():
    conn = FakeConnection(rowcount=0)

    closed = MySQLAttendanceRepository(FakeFactory(conn)).close(
        record_id="rec_1_abc",
        user_id=1,
        out_time=IN_TIME,
        out_coordinates=Coordinates(latitude=0.0, longitude=0.0),
    )

    assert closed is None
    assert "out_time IS NULL" in conn.executed[0][0]


def test_rows_are_read_back_as_utc():
    conn = FakeConnection(
        rows=[
            {
                "record_id": "rec_1_abc",
                "user_id": 1,
                "project_id": 101,
                "in_time": datetime(2026, 2, 1, 8, 0),
                "out_time": None,
                "in_latitude": 1.5,
                "in_longitude": 2.5,
                "out_latitude": None,
                "out_longitude": None,
            }
        ]
    )

    (record,) = MySQLAttendanceRepository(FakeFactory(conn)).find_open_for_user(1)

    assert record == _record()


def test_user_row_maps_to_identity():
    conn = FakeConnection(
        rows=[{"user_id": 3, "full_name": "Admin User", "phone": "9998887777", "role": "ADMIN", "pin_hash": "h"}]
    )

    user = MySQLUserRepository(FakeFactory(conn)).get_by_phone("9998887777")

    assert user.id == 3
    assert user.role is Role.ADMIN


def test_schema_splits_into_three_tables():
    statements = list(_iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert len(statements) == 3
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"']


def test_apply_schema_creates_database_then_tables():
    conn = FakeConnection()

    apply_schema(FakeFactory(conn))

    executed = [sql for sql, _ in conn.executed]
    assert executed[0].startswith("CREATE DATABASE IF NOT EXISTS `timeclock_test`")
    assert len(executed) == 4
    assert conn.committed


@pytest.mark.parametrize("helper", [apply_schema, list_tables])
def test_bootstrap_connect_failure_is_unavailable(helper):
    factory = FakeFactory(connect_error=mysql.connector.InterfaceError(msg="refused"))

    with pytest.raises(Unavailable):
        helper(factory)


def test_bootstrap_statement_failure_is_unavailable():
    conn = FakeConnection(fail_with=mysql.connector.ProgrammingError(msg="syntax"))

    with pytest.raises(Unavailable):
        apply_schema(FakeFactory(conn))

    assert conn.rolled_back and not conn.committed
