from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from ..common.datetime_utils import month_bounds, now_local
from ..common.money import round_money
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..leaves.repository import LeaveRepository
from ..users.repository import EmployeeRepository
from .model import AttendanceSummary, record_to_dict
from .repository import AttendanceRepository
from .summarizer import summarize_month

_SECONDS_PER_HOUR = Decimal(3600)


def hours_between(check_in: datetime, check_out: datetime) -> Decimal:
    """(check_out - check_in) in hours, rounded to 2 dp."""
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    return round_money(seconds / _SECONDS_PER_HOUR)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._employees = employees

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> dict:
        now = now or now_local()
        today = now.date()

        if self._leaves.find_approved_covering(employee_id=employee_id, day=today):
            raise ConflictError("Cannot mark attendance while on approved leave")

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.check_in_time is not None:
            raise ConflictError("Already checked in today")

        if existing:
            if not self._attendance.mark_checkin(attendance_id=existing.attendance_id, check_in_time=now):
                raise ConflictError("Already checked in today")
        else:
            self._attendance.create_checkin(employee_id=employee_id, work_date=today, check_in_time=now)
        return record_to_dict(self._attendance.get_for_employee_and_date(employee_id, today))

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> dict:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.check_in_time is None:
            raise ValidationError("Must check in before checking out")
        if record.check_out_time is not None:
            raise ConflictError("Already checked out today")

        self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            total_hours=hours_between(record.check_in_time, now),
        )
        return record_to_dict(self._attendance.get_for_employee_and_date(employee_id, today))

    def get_today_status(self, employee_id: int, *, today: date | None = None) -> dict:
        today = today or now_local().date()

        leave = self._leaves.find_approved_covering(employee_id=employee_id, day=today)
        if leave:
            return {
                "status": AttendanceStatus.ON_LEAVE.value,
                "leave_type": leave.leave_type.value,
                "check_in_time": None,
                "check_out_time": None,
                "total_hours": None,
            }

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            return {
                "status": AttendanceStatus.ABSENT.value,
                "check_in_time": None,
                "check_out_time": None,
                "total_hours": None,
            }

        return {
            "status": record.status.value,
            "check_in_time": record.check_in_time.isoformat() if record.check_in_time else None,
            "check_out_time": record.check_out_time.isoformat() if record.check_out_time else None,
            "total_hours": record.total_hours,
        }

    def get_history(self, employee_id: int, *, month: int, year: int) -> list[dict]:
        start, end = month_bounds(year, month)
        return [record_to_dict(r) for r in self._attendance.list_for_employee_between(employee_id, start, end)]

    def get_attendance_summary(self, employee_id: int, month: int, year: int) -> AttendanceSummary:
        start, end = month_bounds(year, month)
        records = self._attendance.list_for_employee_between(employee_id, start, end)
        leaves = self._leaves.list_approved_overlapping(employee_id=employee_id, start_date=start, end_date=end)
        return summarize_month(employee_id=employee_id, year=year, month=month, records=records, leaves=leaves)

    def list_by_date(self, day: date):
        return self._attendance.list_by_date(day)

    def get_team_overview(self, day: date) -> dict:
        total = self._employees.count_active()
        present = self._attendance.count_present_on(day)
        on_leave = self._leaves.count_on_leave(day)
        return {
            "date": day.isoformat(),
            "total_employees": total,
            "present": present,
            "on_leave": on_leave,
            "absent": max(0, total - present - on_leave),
        }

    def ensure_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("User not found")
