from datetime import date
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.attendance.summarizer import summarize_month
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.leaves.model import LeaveRequest

# April 2025: starts on a Tuesday, 22 weekdays.
APRIL_WEEKDAYS = [d for d in range(1, 31) if date(2025, 4, d).weekday() < 5]


def present(day: int, month: int = 4, hours: str = "8.00") -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=day,
        employee_id=1,
        work_date=date(2025, month, day),
        status=AttendanceStatus.PRESENT,
        total_hours=Decimal(hours),
    )


def leave(leave_type, start: date, end: date, status=LeaveStatus.APPROVED) -> LeaveRequest:
    return LeaveRequest(
        leave_id=1,
        employee_id=1,
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        reason=None,
        status=status,
    )


def summarize(records=(), leaves=(), year=2025, month=4):
    return summarize_month(employee_id=1, year=year, month=month, records=records, leaves=leaves)


def test_working_days_skip_weekends():
    assert len(APRIL_WEEKDAYS) == 22
    assert summarize().working_days == 22
    assert summarize(month=2).working_days == 20


def test_present_and_paid_leave_make_payable_days():
    records = [present(d) for d in APRIL_WEEKDAYS[:18]]
    leaves = [leave(LeaveType.PAID, date(2025, 4, 28), date(2025, 4, 29))]

    s = summarize(records, leaves)

    assert s.present_days == 18
    assert s.paid_leave_days == 2
    assert s.payable_days == 20
    assert s.absent_days == 2
    assert s.total_hours == Decimal("144.00")
    assert s.reconciles


def test_unpaid_leave_is_not_payable():
    leaves = [
        leave(LeaveType.UNPAID, date(2025, 4, 1), date(2025, 4, 3)),
        leave(LeaveType.SICK, date(2025, 4, 8), date(2025, 4, 8)),
    ]

    s = summarize([present(d) for d in APRIL_WEEKDAYS[5:]], leaves)

    assert s.unpaid_leave_days == 3
    assert s.sick_leave_days == 1
    assert s.payable_days == s.present_days + 1


def test_only_approved_leave_counts():
    leaves = [
        leave(LeaveType.PAID, date(2025, 4, 1), date(2025, 4, 2), status=LeaveStatus.PENDING),
        leave(LeaveType.PAID, date(2025, 4, 3), date(2025, 4, 4), status=LeaveStatus.REJECTED),
    ]
    assert summarize(leaves=leaves).paid_leave_days == 0


def test_leave_crossing_month_boundary_counts_overlap_only():
    leaves = [
        leave(LeaveType.SICK, date(2025, 3, 30), date(2025, 4, 2)),
        leave(LeaveType.PAID, date(2025, 4, 30), date(2025, 5, 6)),
    ]

    s = summarize(leaves=leaves)

    assert s.sick_leave_days == 2
    assert s.paid_leave_days == 1


def test_records_outside_month_are_ignored():
    s = summarize([present(31, month=3), present(1, month=5), present(1)])
    assert s.present_days == 1


def test_absent_days_never_negative():
    leaves = [leave(LeaveType.UNPAID, date(2025, 4, 1), date(2025, 4, 30))]
    assert summarize(leaves=leaves).absent_days == 0


def test_leave_over_weekend_breaks_reconciliation():
    # Fri 4th to Mon 7th is 4 calendar days but only 2 weekdays.
    leaves = [leave(LeaveType.PAID, date(2025, 4, 4), date(2025, 4, 7))]
    records = [present(d) for d in APRIL_WEEKDAYS if d not in (4, 7)]

    s = summarize(records, leaves)

    assert s.paid_leave_days == 4
    assert s.present_days == 20
    assert s.absent_days == 0
    assert s.accounted_days == 24
    assert not s.reconciles


@pytest.mark.parametrize("year,month", [(2025, 0), (2025, 13), (0, 1)])
def test_invalid_period_rejected(year, month):
    with pytest.raises(ValidationError):
        summarize(year=year, month=month)
