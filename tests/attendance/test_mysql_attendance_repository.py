from datetime import date, datetime

import mysql.connector
import pytest

from src.hr_payroll.hr_payroll.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.hr_payroll.hr_payroll.core.exceptions import ConflictError


class StubCursor:
    def __init__(self, error=None):
        self.error = error
        self.lastrowid = 7
        self.closed = False

    def execute(self, sql, params=None):
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class StubConnectionFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self, *, with_database=True):
        return self.conn


def test_create_checkin_returns_new_id():
    conn = StubConnection(StubCursor())
    repo = MySQLAttendanceRepository(StubConnectionFactory(conn))

    new_id = repo.create_checkin(employee_id=1, work_date=date(2025, 4, 14), check_in_time=datetime(2025, 4, 14, 9))

    assert new_id == 7
    assert conn.committed


def test_duplicate_checkin_insert_becomes_conflict():
    duplicate = mysql.connector.IntegrityError(msg="Duplicate entry '1-2025-04-14'", errno=1062)
    conn = StubConnection(StubCursor(error=duplicate))
    repo = MySQLAttendanceRepository(StubConnectionFactory(conn))

    with pytest.raises(ConflictError, match="Already checked in today"):
        repo.create_checkin(employee_id=1, work_date=date(2025, 4, 14), check_in_time=datetime(2025, 4, 14, 9))

    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed
