from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    # Requests
    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping_active(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Non-Rejected requests of the employee intersecting [start_date, end_date]."""

        raise NotImplementedError

    def list_approved_overlapping(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def find_approved_covering(self, *, employee_id: int, day: date) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(
        self,
        *,
        employee_id: int,
        status: Optional[LeaveStatus] = None,
        year: Optional[int] = None,
    ) -> Sequence[dict]:
        """UI rows, newest first, with the approver's name."""

        raise NotImplementedError

    def list_pending(self) -> Sequence[dict]:
        """UI rows joined with the requesting employee, oldest first."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[dict], int]:
        """(page rows, total count)."""

        raise NotImplementedError

    def list_calendar(self, *, start_date: date, end_date: date) -> Sequence[dict]:
        raise NotImplementedError

    # Workflow
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
        """Approve atomically: status transition, guarded balance increment, OnLeave attendance per date.

        Raises ConflictError (and applies nothing) if the request is no longer
        Pending or the balance cannot cover ``days``.
        """

        raise NotImplementedError

    def reject(self, *, leave_id: int, approved_by: int, rejection_reason: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_pending(self, *, leave_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    # Balances
    def get_or_create_balance(
        self,
        *,
        employee_id: int,
        year: int,
        paid_total: int,
        sick_total: int,
    ) -> LeaveBalance:
        raise NotImplementedError

    # Dashboard counts
    def count_on_leave(self, day: date) -> int:
        raise NotImplementedError

    def count_pending(self) -> int:
        raise NotImplementedError

    def count_approved_between(self, start: date, end: date) -> int:
        raise NotImplementedError
