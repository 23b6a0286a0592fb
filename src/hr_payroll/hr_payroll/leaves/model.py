from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    created_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "rejection_reason": self.rejection_reason,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "days": self.days,
        }


@dataclass(frozen=True)
class LeaveBalance:
    """Annual allocation; one row per (employee, year)."""

    employee_id: int
    year: int
    paid_leave_total: int
    paid_leave_used: int
    sick_leave_total: int
    sick_leave_used: int

    @property
    def paid_leave_remaining(self) -> int:
        return self.paid_leave_total - self.paid_leave_used

    @property
    def sick_leave_remaining(self) -> int:
        return self.sick_leave_total - self.sick_leave_used

    def remaining_for(self, leave_type: LeaveType) -> Optional[int]:
        """Remaining days for a balance-tracked type; None for Unpaid."""
        if leave_type == LeaveType.PAID:
            return self.paid_leave_remaining
        if leave_type == LeaveType.SICK:
            return self.sick_leave_remaining
        return None

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "paid_leave_total": self.paid_leave_total,
            "paid_leave_used": self.paid_leave_used,
            "paid_leave_remaining": self.paid_leave_remaining,
            "sick_leave_total": self.sick_leave_total,
            "sick_leave_used": self.sick_leave_used,
            "sick_leave_remaining": self.sick_leave_remaining,
        }
