from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

# Column prefixes in leave_balances; never built from user input.
_BALANCE_COLUMN = {
    LeaveType.PAID: "paid_leave",
    LeaveType.SICK: "sick_leave",
}

_SELECT_REQUEST = """
    SELECT lr.id, lr.employee_id, lr.leave_type, lr.start_date, lr.end_date, lr.reason,
           lr.status, lr.created_at, lr.approved_by, lr.approved_at, lr.rejection_reason
    FROM leave_requests lr
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r.get("reason"),
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejection_reason=r.get("rejection_reason"),
    )


def _to_ui_row(r: dict) -> dict:
    row = _to_request(r).to_dict()
    if r.get("login_id") is not None:
        row["employee"] = {
            "login_id": r["login_id"],
            "name": f"{r.get('first_name') or ''} {r.get('last_name') or ''}".strip(),
            "department": r.get("department"),
        }
    if r.get("approver_first_name"):
        row["approved_by"] = {
            "id": r.get("approved_by"),
            "name": f"{r['approver_first_name']} {r.get('approver_last_name') or ''}".strip(),
        }
    return row


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Requests --------
    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_REQUEST + " WHERE lr.id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def find_overlapping_active(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_REQUEST
                + """
                WHERE lr.employee_id=%s AND lr.status<>%s
                  AND lr.start_date<=%s AND lr.end_date>=%s
                """,
                (int(employee_id), LeaveStatus.REJECTED.value, end_date, start_date),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_approved_overlapping(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_REQUEST
                + """
                WHERE lr.employee_id=%s AND lr.status=%s
                  AND lr.start_date<=%s AND lr.end_date>=%s
                ORDER BY lr.start_date
                """,
                (int(employee_id), LeaveStatus.APPROVED.value, end_date, start_date),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def find_approved_covering(self, *, employee_id: int, day: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_REQUEST
                + """
                WHERE lr.employee_id=%s AND lr.status=%s AND %s BETWEEN lr.start_date AND lr.end_date
                LIMIT 1
                """,
                (int(employee_id), LeaveStatus.APPROVED.value, day),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_employee(
        self,
        *,
        employee_id: int,
        status: Optional[LeaveStatus] = None,
        year: Optional[int] = None,
    ) -> Sequence[dict]:
        clauses = ["lr.employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if year is not None:
            clauses.append("YEAR(lr.start_date)=%s")
            params.append(int(year))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT lr.*, a.first_name AS approver_first_name, a.last_name AS approver_last_name
                FROM leave_requests lr
                LEFT JOIN users a ON a.employee_id = lr.approved_by
                WHERE {where}
                ORDER BY lr.created_at DESC
                """,
                tuple(params),
            )
            return [_to_ui_row(r) for r in fetchall(cur)]

    def list_pending(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lr.*, u.first_name, u.last_name, u.login_id, u.department
                FROM leave_requests lr
                JOIN users u ON u.employee_id = lr.employee_id
                WHERE lr.status=%s
                ORDER BY lr.created_at ASC
                """,
                (LeaveStatus.PENDING.value,),
            )
            return [_to_ui_row(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[dict], int]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("lr.employee_id=%s")
            params.append(int(employee_id))
        if year is not None:
            clauses.append("YEAR(lr.start_date)=%s")
            params.append(int(year))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM leave_requests lr WHERE {where}", tuple(params))
            total = int(fetchone(cur)["n"])

            cur.execute(
                f"""
                SELECT lr.*, u.first_name, u.last_name, u.login_id, u.department,
                       a.first_name AS approver_first_name, a.last_name AS approver_last_name
                FROM leave_requests lr
                JOIN users u ON u.employee_id = lr.employee_id
                LEFT JOIN users a ON a.employee_id = lr.approved_by
                WHERE {where}
                ORDER BY lr.created_at DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_ui_row(r) for r in fetchall(cur)], total

    def list_calendar(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lr.id, lr.employee_id, lr.leave_type, lr.start_date, lr.end_date,
                       u.first_name, u.last_name, u.department
                FROM leave_requests lr
                JOIN users u ON u.employee_id = lr.employee_id
                WHERE lr.status=%s AND lr.start_date<=%s AND lr.end_date>=%s
                ORDER BY lr.start_date
                """,
                (LeaveStatus.APPROVED.value, end_date, start_date),
            )
            return [
                {
                    "id": int(r["id"]),
                    "employee_id": int(r["employee_id"]),
                    "employee_name": f"{r['first_name']} {r['last_name']}",
                    "department": r.get("department"),
                    "leave_type": r["leave_type"],
                    "start_date": r["start_date"].isoformat(),
                    "end_date": r["end_date"].isoformat(),
                }
                for r in fetchall(cur)
            ]

    # -------- Workflow --------
    def apply_approval(
        self,
        *,
        leave_id: int,
        approved_by: int,
        employee_id: int,
        leave_type: LeaveType,
        balance_year: int,
        days: int,
        dates: Sequence[date],
        default_paid_total: int,
        default_sick_total: int,
    ) -> None:
        # One connection = one transaction; any raise below rolls back every step.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (LeaveStatus.APPROVED.value, int(approved_by), int(leave_id), LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                raise ConflictError("Leave request has already been processed")

            column = _BALANCE_COLUMN.get(leave_type)
            if column:
                cur.execute(
                    """
                    INSERT IGNORE INTO leave_balances(employee_id, year, paid_leave_total, sick_leave_total)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), int(balance_year), int(default_paid_total), int(default_sick_total)),
                )
                cur.execute(
                    f"""
                    UPDATE leave_balances
                    SET {column}_used = {column}_used + %s
                    WHERE employee_id=%s AND year=%s AND {column}_used + %s <= {column}_total
                    """,
                    (int(days), int(employee_id), int(balance_year), int(days)),
                )
                if cur.rowcount == 0:
                    raise ConflictError(f"Insufficient {leave_type.value.lower()} leave balance to approve this request")

            cur.executemany(
                """
                INSERT INTO attendance_records(employee_id, work_date, status, note)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), note=VALUES(note)
                """,
                [
                    (int(employee_id), d, AttendanceStatus.ON_LEAVE.value, f"{leave_type.value} Leave")
                    for d in dates
                ],
            )

    def reject(self, *, leave_id: int, approved_by: int, rejection_reason: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=NOW(), rejection_reason=%s
                WHERE id=%s AND status=%s
                """,
                (
                    LeaveStatus.REJECTED.value,
                    int(approved_by),
                    rejection_reason,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete_pending(self, *, leave_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE id=%s AND employee_id=%s AND status=%s",
                (int(leave_id), int(employee_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    # -------- Balances --------
    def get_or_create_balance(
        self,
        *,
        employee_id: int,
        year: int,
        paid_total: int,
        sick_total: int,
    ) -> LeaveBalance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO leave_balances(employee_id, year, paid_leave_total, sick_leave_total)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), int(year), int(paid_total), int(sick_total)),
            )
            cur.execute(
                """
                SELECT employee_id, year, paid_leave_total, paid_leave_used, sick_leave_total, sick_leave_used
                FROM leave_balances
                WHERE employee_id=%s AND year=%s
                """,
                (int(employee_id), int(year)),
            )
            r = fetchone(cur)
            return LeaveBalance(
                employee_id=int(r["employee_id"]),
                year=int(r["year"]),
                paid_leave_total=int(r["paid_leave_total"]),
                paid_leave_used=int(r["paid_leave_used"]),
                sick_leave_total=int(r["sick_leave_total"]),
                sick_leave_used=int(r["sick_leave_used"]),
            )

    # -------- Dashboard counts --------
    def count_on_leave(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT employee_id) AS n FROM leave_requests
                WHERE status=%s AND start_date<=%s AND end_date>=%s
                """,
                (LeaveStatus.APPROVED.value, day, day),
            )
            return int(fetchone(cur)["n"])

    def count_pending(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (LeaveStatus.PENDING.value,))
            return int(fetchone(cur)["n"])

    def count_approved_between(self, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n FROM leave_requests
                WHERE status=%s AND DATE(approved_at) BETWEEN %s AND %s
                """,
                (LeaveStatus.APPROVED.value, start, end),
            )
            return int(fetchone(cur)["n"])
