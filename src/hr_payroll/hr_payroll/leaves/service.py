from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from ..common.datetime_utils import inclusive_days, iter_dates, month_bounds
from ..common.validators import require_max_length
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_PAID_LEAVE_DAYS, DEFAULT_SICK_LEAVE_DAYS, MAX_REASON_LENGTH
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def parse_leave_type(value: str) -> LeaveType:
    try:
        return LeaveType(value)
    except ValueError:
        raise ValidationError("Invalid leave type")


def parse_leave_status(value: Optional[str]) -> Optional[LeaveStatus]:
    if not value:
        return None
    try:
        return LeaveStatus(value)
    except ValueError:
        raise ValidationError("Invalid leave status")


class LeaveService:
    """Leave request workflow: request, approve/reject, cancel, balances."""

    def __init__(
        self,
        leaves: LeaveRepository,
        *,
        paid_leave_days: int = DEFAULT_PAID_LEAVE_DAYS,
        sick_leave_days: int = DEFAULT_SICK_LEAVE_DAYS,
    ):
        self._leaves = leaves
        self._paid_leave_days = int(paid_leave_days)
        self._sick_leave_days = int(sick_leave_days)

    def request_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        if end_date < start_date:
            raise ValidationError("End date must be after start date")
        reason = (reason or "").strip() or None
        require_max_length(reason, "Reason", MAX_REASON_LENGTH)

        if self._leaves.find_overlapping_active(employee_id=int(employee_id), start_date=start_date, end_date=end_date):
            raise ConflictError("You already have a leave request for these dates")

        days = inclusive_days(start_date, end_date)
        if leave_type != LeaveType.UNPAID:
            balance = self.get_balance(employee_id, start_date.year)
            remaining = balance.remaining_for(leave_type)
            if days > remaining:
                raise ValidationError(
                    f"Insufficient {leave_type.value.lower()} leave balance. Available: {remaining} days"
                )

        leave_id = self._leaves.create(
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        return self._get_or_raise(leave_id)

    def get_balance(self, employee_id: int, year: int) -> LeaveBalance:
        return self._leaves.get_or_create_balance(
            employee_id=int(employee_id),
            year=int(year),
            paid_total=self._paid_leave_days,
            sick_total=self._sick_leave_days,
        )

    def approve_leave(self, *, leave_id: int, admin_id: int) -> LeaveRequest:
        leave = self._get_or_raise(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ConflictError("Leave request has already been processed")

        self._leaves.apply_approval(
            leave_id=leave.leave_id,
            approved_by=int(admin_id),
            employee_id=leave.employee_id,
            leave_type=leave.leave_type,
            balance_year=leave.start_date.year,
            days=leave.days,
            dates=list(iter_dates(leave.start_date, leave.end_date)),
            default_paid_total=self._paid_leave_days,
            default_sick_total=self._sick_leave_days,
        )
        logger.info(
            "Leave %s approved by %s: employee=%s type=%s days=%s",
            leave.leave_id,
            admin_id,
            leave.employee_id,
            leave.leave_type.value,
            leave.days,
        )
        return self._get_or_raise(leave.leave_id)

    def reject_leave(self, *, leave_id: int, admin_id: int, rejection_reason: Optional[str] = None) -> LeaveRequest:
        reason = (rejection_reason or "").strip() or None
        require_max_length(reason, "Rejection reason", MAX_REASON_LENGTH)
        if not self._leaves.reject(leave_id=int(leave_id), approved_by=int(admin_id), rejection_reason=reason):
            raise NotFoundError("Leave request not found or already processed")
        logger.info("Leave %s rejected by %s", leave_id, admin_id)
        return self._get_or_raise(leave_id)

    def cancel_leave(self, *, leave_id: int, employee_id: int) -> None:
        if not self._leaves.delete_pending(leave_id=int(leave_id), employee_id=int(employee_id)):
            raise NotFoundError("Leave request not found or cannot be cancelled")

    def list_my_leaves(
        self,
        employee_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        year: Optional[int] = None,
    ):
        return self._leaves.list_for_employee(employee_id=int(employee_id), status=status, year=year)

    def list_pending(self):
        return self._leaves.list_pending()

    def list_all(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        year: Optional[int] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> dict:
        page = max(int(page), 1)
        limit = max(int(limit), 1)
        rows, total = self._leaves.list_all(
            status=status,
            employee_id=employee_id,
            year=year,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return {
            "leaves": list(rows),
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit),
            },
        }

    def get_leave_calendar(self, year: int, month: int):
        start, end = month_bounds(year, month)
        return self._leaves.list_calendar(start_date=start, end_date=end)

    def get_team_summary(self, today: date) -> dict:
        month_start, month_end = month_bounds(today.year, today.month)
        return {
            "on_leave_today": self._leaves.count_on_leave(today),
            "pending_requests": self._leaves.count_pending(),
            "approved_this_month": self._leaves.count_approved_between(month_start, month_end),
        }

    def _get_or_raise(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave
