from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee_between(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Rows in [start, end], newest first."""

        raise NotImplementedError

    def create_checkin(self, *, employee_id: int, work_date: date, check_in_time: datetime) -> int:
        raise NotImplementedError

    def mark_checkin(self, *, attendance_id: int, check_in_time: datetime) -> bool:
        """Set check-in on a row that exists without one (e.g. pre-created Absent row)."""

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, total_hours: Decimal) -> bool:
        raise NotImplementedError

    def list_by_date(self, work_date: date) -> Sequence[dict]:
        """Admin view rows (joined with users), ordered by check-in time."""

        raise NotImplementedError

    def count_present_on(self, work_date: date) -> int:
        raise NotImplementedError
