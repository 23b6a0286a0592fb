from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import require_period
from ..common.validators import require_positive_amount
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..users.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.proration import prorate
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import Payslip, PayrollRun, SalaryStructure
from .repository import SalaryStructureRepository

logger = logging.getLogger(__name__)


def _run_error(employee, exc: Exception) -> dict:
    return {
        "employee_id": employee.employee_id,
        "login_id": employee.login_id,
        "name": employee.full_name,
        "message": str(exc),
    }


class PayrollService:
    """Salary structures, single payslips and bulk monthly payroll."""

    def __init__(
        self,
        salaries: SalaryStructureRepository,
        employees: EmployeeRepository,
        attendance: AttendanceService,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._attendance = attendance
        self._calculator = calculator or StandardSalaryCalculator()

    def upsert_salary_structure(self, *, employee_id: int, month_wage, effective_from: Optional[date]) -> SalaryStructure:
        wage = require_positive_amount(month_wage, "Monthly wage")
        if effective_from is None:
            raise ValidationError("Effective from date is required")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")

        breakdown = self._calculator.calculate(wage)
        structure = self._salaries.upsert(
            employee_id=int(employee_id),
            effective_from=effective_from,
            breakdown=breakdown,
        )
        logger.info(
            "Salary structure saved: employee=%s wage=%s effective_from=%s",
            employee_id,
            breakdown.month_wage,
            effective_from.isoformat(),
        )
        return structure

    def get_salary_structure(self, employee_id: int) -> SalaryStructure:
        structure = self._salaries.get_latest(int(employee_id))
        if not structure:
            raise NotFoundError("No salary structure found for this employee")
        return structure

    def get_salary_history(self, employee_id: int) -> list[SalaryStructure]:
        return list(self._salaries.list_history(int(employee_id)))

    def compute_payslip(self, employee_id: int, year: int, month: int) -> Payslip:
        require_period(year, month)
        period_start = date(int(year), int(month), 1)

        structure = self._salaries.get_effective(int(employee_id), period_start)
        if not structure:
            raise NotFoundError("No salary structure found for this employee")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")

        summary = self._attendance.get_attendance_summary(int(employee_id), int(month), int(year))
        prorated = prorate(
            structure.breakdown,
            total_days=summary.working_days,
            payable_days=summary.payable_days,
        )
        return Payslip(
            employee=employee,
            year=int(year),
            month=int(month),
            attendance=summary,
            structure=structure,
            prorated=prorated,
        )

    def generate_monthly_payroll(self, year: int, month: int) -> PayrollRun:
        require_period(year, month)
        employees = self._employees.list_active_with_salary_structure()
        logger.info("Payroll run %04d-%02d started for %s employees", int(year), int(month), len(employees))

        payslips: list[Payslip] = []
        errors: list[dict] = []
        for employee in employees:
            try:
                payslips.append(self.compute_payslip(employee.employee_id, year, month))
            except DomainError as exc:
                logger.warning("Payroll failed for employee %s (%s): %s", employee.employee_id, employee.login_id, exc)
                errors.append(_run_error(employee, exc))
            except Exception as exc:
                logger.exception("Unexpected payroll failure for employee %s (%s)", employee.employee_id, employee.login_id)
                errors.append(_run_error(employee, exc))

        run = PayrollRun(year=int(year), month=int(month), payslips=payslips, errors=errors)
        logger.info(
            "Payroll run %04d-%02d finished: %s payslips, %s errors, net total %s",
            run.year,
            run.month,
            len(payslips),
            len(errors),
            run.total_net,
        )
        return run

    def get_payroll_summary(self) -> dict:
        return self._salaries.summary_stats()

    def list_all_salaries(self) -> list[dict]:
        return list(self._salaries.list_all_current())
