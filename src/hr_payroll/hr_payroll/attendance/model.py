from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    total_hours: Optional[Decimal] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    """Month-level attendance figures used to prorate pay."""

    employee_id: int
    year: int
    month: int
    working_days: int
    present_days: int
    paid_leave_days: int
    sick_leave_days: int
    unpaid_leave_days: int
    absent_days: int
    payable_days: int
    total_hours: Decimal

    @property
    def accounted_days(self) -> int:
        return (
            self.present_days
            + self.paid_leave_days
            + self.sick_leave_days
            + self.unpaid_leave_days
            + self.absent_days
        )

    @property
    def reconciles(self) -> bool:
        """False when leave spanning weekends (or attendance on weekends) pushes the day counts past working_days."""
        return self.accounted_days == self.working_days

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year": self.year,
            "month": self.month,
            "working_days": self.working_days,
            "present_days": self.present_days,
            "paid_leave_days": self.paid_leave_days,
            "sick_leave_days": self.sick_leave_days,
            "unpaid_leave_days": self.unpaid_leave_days,
            "absent_days": self.absent_days,
            "payable_days": self.payable_days,
            "total_hours": self.total_hours,
        }


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "employee_id": r.employee_id,
        "date": r.work_date.isoformat(),
        "status": r.status.value,
        "check_in_time": r.check_in_time.isoformat() if r.check_in_time else None,
        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
        "total_hours": r.total_hours,
        "note": r.note,
    }
