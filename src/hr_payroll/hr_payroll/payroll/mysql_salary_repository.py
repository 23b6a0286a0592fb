from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import ZERO, round_money
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import SalaryBreakdown, SalaryStructure
from .repository import SalaryStructureRepository

_BREAKDOWN_COLUMNS = (
    "month_wage",
    "yearly_wage",
    "basic_salary",
    "hra",
    "standard_allowance",
    "performance_bonus",
    "lta",
    "fixed_allowance",
    "pf_deduction",
    "professional_tax",
)

_SELECT = (
    "SELECT salary_id, employee_id, effective_from, created_at, updated_at, "
    + ", ".join(_BREAKDOWN_COLUMNS)
    + " FROM salary_structures"
)

# Latest version per employee.
_CURRENT = """
    SELECT s.*
    FROM salary_structures s
    JOIN (
        SELECT employee_id, MAX(effective_from) AS effective_from
        FROM salary_structures
        GROUP BY employee_id
    ) latest ON latest.employee_id = s.employee_id AND latest.effective_from = s.effective_from
"""


def _to_breakdown(r: dict) -> SalaryBreakdown:
    return SalaryBreakdown(**{col: as_decimal(r[col]) for col in _BREAKDOWN_COLUMNS})


def _to_structure(r: dict) -> SalaryStructure:
    return SalaryStructure(
        employee_id=int(r["employee_id"]),
        effective_from=r["effective_from"],
        breakdown=_to_breakdown(r),
        salary_id=int(r["salary_id"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLSalaryStructureRepository(SalaryStructureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, employee_id: int, effective_from: date, breakdown: SalaryBreakdown) -> SalaryStructure:
        values = [getattr(breakdown, col) for col in _BREAKDOWN_COLUMNS]
        columns = ", ".join(_BREAKDOWN_COLUMNS)
        placeholders = ", ".join(["%s"] * len(_BREAKDOWN_COLUMNS))
        updates = ", ".join(f"{col}=VALUES({col})" for col in _BREAKDOWN_COLUMNS)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO salary_structures(employee_id, effective_from, {columns})
                VALUES(%s, %s, {placeholders})
                ON DUPLICATE KEY UPDATE {updates}, updated_at=CURRENT_TIMESTAMP
                """,
                (int(employee_id), effective_from, *values),
            )
            cur.execute(_SELECT + " WHERE employee_id=%s AND effective_from=%s", (int(employee_id), effective_from))
            return _to_structure(fetchone(cur))

    def get_effective(self, employee_id: int, as_of: date) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE employee_id=%s AND effective_from <= %s
                ORDER BY effective_from DESC
                LIMIT 1
                """,
                (int(employee_id), as_of),
            )
            r = fetchone(cur)
            return _to_structure(r) if r else None

    def get_latest(self, employee_id: int) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s ORDER BY effective_from DESC LIMIT 1",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_structure(r) if r else None

    def list_history(self, employee_id: int) -> Sequence[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY effective_from DESC", (int(employee_id),))
            return [_to_structure(r) for r in fetchall(cur)]

    def summary_stats(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS employees_with_salary,
                       COALESCE(SUM(cur.month_wage), 0) AS total_monthly_payroll,
                       COALESCE(AVG(cur.month_wage), 0) AS average_salary
                FROM ({_CURRENT}) cur
                JOIN users u ON u.employee_id = cur.employee_id
                WHERE u.is_active = 1
                """
            )
            r = fetchone(cur) or {}
            return {
                "employees_with_salary": int(r.get("employees_with_salary") or 0),
                "total_monthly_payroll": round_money(as_decimal(r.get("total_monthly_payroll")) or ZERO),
                "average_salary": round_money(as_decimal(r.get("average_salary")) or ZERO),
            }

    def list_all_current(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT u.employee_id, u.login_id, u.first_name, u.last_name, u.department,
                       cur.month_wage, cur.yearly_wage, cur.basic_salary, cur.effective_from
                FROM users u
                LEFT JOIN ({_CURRENT}) cur ON cur.employee_id = u.employee_id
                WHERE u.is_active = 1 AND u.role = %s
                ORDER BY u.first_name
                """,
                (Role.EMPLOYEE.value,),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                wage: Optional[Decimal] = as_decimal(r.get("month_wage"))
                out.append(
                    {
                        "employee_id": int(r["employee_id"]),
                        "login_id": r["login_id"],
                        "name": f"{r['first_name']} {r['last_name']}",
                        "department": r.get("department"),
                        "month_wage": wage,
                        "yearly_wage": as_decimal(r.get("yearly_wage")),
                        "basic_salary": as_decimal(r.get("basic_salary")),
                        "effective_from": r["effective_from"].isoformat() if r.get("effective_from") else None,
                        "has_salary_structure": wage is not None,
                    }
                )
            return out
