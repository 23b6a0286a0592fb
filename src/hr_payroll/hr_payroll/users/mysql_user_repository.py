from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    u.employee_id, u.login_id, u.first_name, u.last_name, u.role,
    u.department, u.joining_date, u.password_hash, u.is_active
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        login_id=row["login_id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
        department=row.get("department"),
        joining_date=row.get("joining_date"),
        password_hash=row.get("password_hash") or "",
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE u.employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_login_id(self, login_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE u.login_id=%s", (login_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active_with_salary_structure(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users u
                WHERE u.is_active=1 AND u.role=%s
                  AND EXISTS (SELECT 1 FROM salary_structures ss WHERE ss.employee_id = u.employee_id)
                ORDER BY u.first_name, u.employee_id
                """,
                (Role.EMPLOYEE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE is_active=1")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
