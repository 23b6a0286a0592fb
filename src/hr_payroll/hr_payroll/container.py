from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_PAID_LEAVE_DAYS,
    DEFAULT_SICK_LEAVE_DAYS,
    DEFAULT_TOKEN_MAX_AGE_SECONDS,
    PROFESSIONAL_TAX,
    STANDARD_ALLOWANCE,
)
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.mysql_salary_repository import MySQLSalaryStructureRepository
from .payroll.repository import SalaryStructureRepository
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLEmployeeRepository
from .users.repository import EmployeeRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    salaries_repo: SalaryStructureRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    salaries_repo: SalaryStructureRepository,
    secret_key: str,
    token_max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    standard_allowance: Decimal = STANDARD_ALLOWANCE,
    professional_tax: Decimal = PROFESSIONAL_TAX,
    paid_leave_days: int = DEFAULT_PAID_LEAVE_DAYS,
    sick_leave_days: int = DEFAULT_SICK_LEAVE_DAYS,
) -> Container:
    """Build services over the given repositories (MySQL in the app, fakes in tests)."""
    auth_service = AuthService(employees_repo, secret_key=secret_key, max_age_seconds=token_max_age_seconds)
    attendance_service = AttendanceService(attendance_repo, leaves_repo, employees_repo)
    leave_service = LeaveService(
        leaves_repo,
        paid_leave_days=paid_leave_days,
        sick_leave_days=sick_leave_days,
    )
    payroll_service = PayrollService(
        salaries_repo,
        employees_repo,
        attendance_service,
        calculator=StandardSalaryCalculator(
            standard_allowance=standard_allowance,
            professional_tax=professional_tax,
        ),
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
        auth_service=auth_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, secret_key: str, **settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_container(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        salaries_repo=MySQLSalaryStructureRepository(conn),
        secret_key=secret_key,
        **settings,
    )
