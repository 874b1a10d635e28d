from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from classroom_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from classroom_attendance.core.enums import AttendanceStatus
from classroom_attendance.core.exceptions import ConflictError, InvalidSessionError, StoreError
from classroom_attendance.database.mysql_base import db_cursor, in_clause


class FakeCursor:
    def __init__(self, results=None):
        self.executed = []
        self.closed = False
        self._results = list(results or [])

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._results.pop(0) if self._results else None

    def fetchall(self):
        return []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self._conn = conn
        self._error = error

    def connect(self):
        if self._error:
            raise self._error
        return self._conn


def test_commit_on_success():
    conn = FakeConnection(FakeCursor())
    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")
    assert conn.committed and not conn.rolled_back and conn.closed


def test_duplicate_key_becomes_conflict():
    conn = FakeConnection(FakeCursor())
    with pytest.raises(ConflictError, match="Username already exists"):
        with db_cursor(FakeFactory(conn), conflict_message="Username already exists"):
            raise mysql.connector.IntegrityError(msg="Duplicate entry 'a'", errno=errorcode.ER_DUP_ENTRY)
    assert conn.rolled_back and not conn.committed


def test_driver_error_becomes_store_error():
    conn = FakeConnection(FakeCursor())
    with pytest.raises(StoreError) as info:
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.ProgrammingError(msg="Table 'x' doesn't exist")
    assert str(info.value) == "Database error"
    assert "doesn't exist" in info.value.detail
    assert conn.rolled_back and conn.closed


def test_connect_failure_becomes_store_error():
    with pytest.raises(StoreError):
        with db_cursor(FakeFactory(error=mysql.connector.InterfaceError(msg="Can't connect"))):
            pass


def test_domain_error_rolls_back_and_passes_through():
    cursor = FakeCursor(results=[None])
    conn = FakeConnection(cursor)
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with pytest.raises(InvalidSessionError):
        with repo.transaction() as uow:
            if uow.lock_session(9) is None:
                raise InvalidSessionError("Invalid session_id")

    assert conn.rolled_back and not conn.committed
    assert cursor.executed == [("SELECT class_id FROM sessions WHERE id=%s FOR UPDATE", (9,))]


def test_unit_of_work_statements():
    cursor = FakeCursor(results=[{"class_id": 4}, {"n": 2}])
    conn = FakeConnection(cursor)
    repo = MySQLAttendanceRepository(FakeFactory(conn))

    with repo.transaction() as uow:
        assert uow.lock_session(1) == 4
        assert uow.count_students_in_class([7, 8], 4) == 2
        uow.upsert(session_id=1, student_id=7, status=AttendanceStatus.PRESENT)

    assert conn.committed
    count_sql, count_params = cursor.executed[1]
    assert "IN (%s, %s) AND class_id=%s" in count_sql
    assert count_params == (7, 8, 4)
    upsert_sql, upsert_params = cursor.executed[2]
    assert "ON DUPLICATE KEY UPDATE status=VALUES(status)" in upsert_sql
    assert upsert_params == (1, 7, "present")


def test_in_clause():
    assert in_clause([1]) == "%s"
    assert in_clause([1, 2, 3]) == "%s, %s, %s"
    with pytest.raises(ValueError):
        in_clause([])
