from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, employee_id, work_date, status,
           check_in_time, check_out_time, total_hours, note
    FROM attendance_records
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        total_hours=as_decimal(r.get("total_hours")),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND work_date=%s", (int(employee_id), work_date))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee_between(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(employee_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, employee_id: int, work_date: date, check_in_time: datetime) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, check_in_time, AttendanceStatus.PRESENT.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            # uq_attendance_employee_date: a concurrent check-in won the insert.
            raise ConflictError("Already checked in today") from exc

    def mark_checkin(self, *, attendance_id: int, check_in_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, status=%s
                WHERE attendance_id=%s AND check_in_time IS NULL
                """,
                (check_in_time, AttendanceStatus.PRESENT.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, total_hours: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_by_date(self, work_date: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.attendance_id, ar.employee_id, ar.work_date, ar.status,
                       ar.check_in_time, ar.check_out_time, ar.total_hours, ar.note,
                       u.first_name, u.last_name, u.login_id, u.department
                FROM attendance_records ar
                JOIN users u ON u.employee_id = ar.employee_id
                WHERE ar.work_date=%s
                ORDER BY ar.check_in_time ASC
                """,
                (work_date,),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "attendance_id": int(r["attendance_id"]),
                        "employee_id": int(r["employee_id"]),
                        "name": f"{r['first_name']} {r['last_name']}",
                        "login_id": r["login_id"],
                        "department": r.get("department"),
                        "date": r["work_date"].isoformat(),
                        "status": r["status"],
                        "check_in_time": r["check_in_time"].isoformat() if r.get("check_in_time") else None,
                        "check_out_time": r["check_out_time"].isoformat() if r.get("check_out_time") else None,
                        "total_hours": as_decimal(r.get("total_hours")),
                        "note": r.get("note"),
                    }
                )
            return out

    def count_present_on(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(DISTINCT employee_id) AS n FROM attendance_records WHERE work_date=%s AND status=%s",
                (work_date, AttendanceStatus.PRESENT.value),
            )
            return int(fetchone(cur)["n"])
