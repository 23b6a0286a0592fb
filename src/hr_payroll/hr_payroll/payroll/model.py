from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..attendance.model import AttendanceSummary
from ..common.datetime_utils import month_name
from ..users.model import Employee


@dataclass(frozen=True)
class SalaryBreakdown:
    """Full-month earnings and deductions for one monthly wage, all rounded to 2 dp."""

    month_wage: Decimal
    yearly_wage: Decimal
    basic_salary: Decimal
    hra: Decimal
    standard_allowance: Decimal
    performance_bonus: Decimal
    lta: Decimal
    fixed_allowance: Decimal
    pf_deduction: Decimal
    professional_tax: Decimal

    @property
    def gross_salary(self) -> Decimal:
        return (
            self.basic_salary
            + self.hra
            + self.standard_allowance
            + self.performance_bonus
            + self.lta
            + self.fixed_allowance
        )

    @property
    def total_deductions(self) -> Decimal:
        return self.pf_deduction + self.professional_tax

    @property
    def net_salary(self) -> Decimal:
        return self.gross_salary - self.total_deductions

    def to_dict(self) -> dict:
        return {
            "month_wage": self.month_wage,
            "yearly_wage": self.yearly_wage,
            "basic_salary": self.basic_salary,
            "hra": self.hra,
            "standard_allowance": self.standard_allowance,
            "performance_bonus": self.performance_bonus,
            "lta": self.lta,
            "fixed_allowance": self.fixed_allowance,
            "gross_salary": self.gross_salary,
            "pf_deduction": self.pf_deduction,
            "professional_tax": self.professional_tax,
            "total_deductions": self.total_deductions,
            "net_salary": self.net_salary,
        }


@dataclass(frozen=True)
class SalaryStructure:
    """One version of an employee's salary, effective from ``effective_from``."""

    employee_id: int
    effective_from: date
    breakdown: SalaryBreakdown
    salary_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.salary_id,
            "employee_id": self.employee_id,
            "effective_from": self.effective_from.isoformat(),
        }
        data.update(self.breakdown.to_dict())
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


@dataclass(frozen=True)
class ProratedSalary:
    total_days: int
    payable_days: int
    ratio: Decimal
    basic_salary: Decimal
    hra: Decimal
    standard_allowance: Decimal
    performance_bonus: Decimal
    lta: Decimal
    fixed_allowance: Decimal
    gross_salary: Decimal
    pf_deduction: Decimal
    professional_tax: Decimal
    loss_of_pay: Decimal
    net_salary: Decimal
    exceeds_working_days: bool = False


@dataclass(frozen=True)
class Payslip:
    employee: Employee
    year: int
    month: int
    attendance: AttendanceSummary
    structure: SalaryStructure
    prorated: ProratedSalary

    @property
    def full_month_salary(self) -> Decimal:
        return self.structure.breakdown.gross_salary

    @property
    def total_deductions(self) -> Decimal:
        p = self.prorated
        return p.pf_deduction + p.professional_tax + p.loss_of_pay

    @property
    def net_salary(self) -> Decimal:
        return self.prorated.net_salary

    def to_dict(self) -> dict:
        e = self.employee
        p = self.prorated
        a = self.attendance
        return {
            "employee": {
                "id": e.employee_id,
                "login_id": e.login_id,
                "name": e.full_name,
                "department": e.department,
                "joining_date": e.joining_date.isoformat() if e.joining_date else None,
            },
            "period": {
                "year": self.year,
                "month": self.month,
                "month_name": month_name(self.month),
            },
            "attendance": {
                "working_days": a.working_days,
                "present_days": a.present_days,
                "paid_leave_days": a.paid_leave_days,
                "sick_leave_days": a.sick_leave_days,
                "unpaid_leave_days": a.unpaid_leave_days,
                "absent_days": a.absent_days,
                "payable_days": a.payable_days,
                "total_hours": a.total_hours,
                "exceeds_working_days": p.exceeds_working_days,
            },
            "earnings": {
                "basic_salary": p.basic_salary,
                "hra": p.hra,
                "standard_allowance": p.standard_allowance,
                "performance_bonus": p.performance_bonus,
                "lta": p.lta,
                "fixed_allowance": p.fixed_allowance,
                "gross_salary": p.gross_salary,
            },
            "deductions": {
                "pf_deduction": p.pf_deduction,
                "professional_tax": p.professional_tax,
                "loss_of_pay": p.loss_of_pay,
                "total_deductions": self.total_deductions,
            },
            "net_salary": self.net_salary,
            "full_month_salary": self.full_month_salary,
            "effective_from": self.structure.effective_from.isoformat(),
        }


@dataclass(frozen=True)
class PayrollRun:
    """Result of a bulk payroll run. Totals cover successful payslips only."""

    year: int
    month: int
    payslips: list[Payslip]
    errors: list[dict]

    @property
    def total_gross(self) -> Decimal:
        return sum((p.prorated.gross_salary for p in self.payslips), Decimal("0.00"))

    @property
    def total_deductions(self) -> Decimal:
        return sum((p.total_deductions for p in self.payslips), Decimal("0.00"))

    @property
    def total_net(self) -> Decimal:
        return sum((p.net_salary for p in self.payslips), Decimal("0.00"))

    @property
    def total_pf(self) -> Decimal:
        return sum((p.prorated.pf_deduction for p in self.payslips), Decimal("0.00"))

    def to_dict(self) -> dict:
        return {
            "period": {"year": self.year, "month": self.month, "month_name": month_name(self.month)},
            "summary": {
                "total_employees": len(self.payslips),
                "successful": len(self.payslips),
                "failed": len(self.errors),
                "total_gross": self.total_gross,
                "total_deductions": self.total_deductions,
                "total_net": self.total_net,
                "total_pf": self.total_pf,
            },
            "payslips": [p.to_dict() for p in self.payslips],
            "errors": list(self.errors),
        }
