"""Attendance-to-pay reconciliation for one employee and month.

Pure functions: callers load the rows, nothing here touches storage.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..common.datetime_utils import count_working_days, month_bounds, overlap_days
from ..common.money import round_money
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from .model import AttendanceRecord, AttendanceSummary


def summarize_month(
    *,
    employee_id: int,
    year: int,
    month: int,
    records: Iterable[AttendanceRecord],
    leaves: Iterable,
) -> AttendanceSummary:
    """Turn a month of attendance rows and leave requests into payable-day counts.

    ``leaves`` may contain requests of any status; only Approved ones count.
    Leave days are calendar days of overlap with the month, weekends included.
    """
    month_start, month_end = month_bounds(year, month)
    working_days = count_working_days(month_start, month_end)

    present_days = 0
    total_hours = Decimal("0")
    for r in records:
        if not month_start <= r.work_date <= month_end:
            continue
        if r.status == AttendanceStatus.PRESENT:
            present_days += 1
        if r.total_hours is not None:
            total_hours += Decimal(r.total_hours)

    leave_days = {t: 0 for t in LeaveType}
    for lv in leaves:
        if lv.status != LeaveStatus.APPROVED:
            continue
        leave_days[lv.leave_type] += overlap_days(lv.start_date, lv.end_date, month_start, month_end)

    paid = leave_days[LeaveType.PAID]
    sick = leave_days[LeaveType.SICK]
    unpaid = leave_days[LeaveType.UNPAID]

    return AttendanceSummary(
        employee_id=int(employee_id),
        year=int(year),
        month=int(month),
        working_days=working_days,
        present_days=present_days,
        paid_leave_days=paid,
        sick_leave_days=sick,
        unpaid_leave_days=unpaid,
        absent_days=max(0, working_days - present_days - paid - unpaid - sick),
        payable_days=present_days + paid + sick,
        total_hours=round_money(total_hours),
    )
