from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.attendance.service import AttendanceService, hours_between
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from src.hr_payroll.hr_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from tests.fakes import InMemoryAttendance, InMemoryEmployees, InMemoryLeaves, make_employee

MORNING = datetime(2025, 4, 14, 9, 0)
EVENING = datetime(2025, 4, 14, 17, 30)


@pytest.fixture
def repos():
    attendance = InMemoryAttendance()
    leaves = InMemoryLeaves(attendance)
    employees = InMemoryEmployees([make_employee(1), make_employee(2), make_employee(3)])
    return attendance, leaves, employees


@pytest.fixture
def svc(repos):
    return AttendanceService(*repos)


def test_check_in_creates_present_record(svc, repos):
    attendance, _, _ = repos

    data = svc.check_in(1, now=MORNING)

    rec = attendance.get_for_employee_and_date(1, MORNING.date())
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_in_time == MORNING
    assert data["status"] == "Present"
    assert data["check_in_time"] == MORNING.isoformat()


def test_second_check_in_same_day_conflicts(svc):
    svc.check_in(1, now=MORNING)
    with pytest.raises(ConflictError):
        svc.check_in(1, now=MORNING.replace(hour=10))


def test_check_in_over_existing_absent_row(svc, repos):
    attendance, _, _ = repos
    attendance.put(1, MORNING.date(), AttendanceStatus.ABSENT)

    svc.check_in(1, now=MORNING)

    rec = attendance.get_for_employee_and_date(1, MORNING.date())
    assert rec.status == AttendanceStatus.PRESENT
    assert len(attendance.rows) == 1


def test_check_in_race_on_existing_row_conflicts(repos):
    attendance, leaves, employees = repos
    attendance.put(1, MORNING.date(), AttendanceStatus.ABSENT)
    # Another request stamped check_in_time between our read and our update.
    attendance.mark_checkin = lambda **kwargs: False
    svc = AttendanceService(attendance, leaves, employees)

    with pytest.raises(ConflictError, match="Already checked in today"):
        svc.check_in(1, now=MORNING)


def test_check_in_blocked_by_approved_leave(svc, repos):
    _, leaves, _ = repos
    leaves.add(1, LeaveType.SICK, date(2025, 4, 14), date(2025, 4, 15), status=LeaveStatus.APPROVED)

    with pytest.raises(ConflictError):
        svc.check_in(1, now=MORNING)


def test_pending_leave_does_not_block_check_in(svc, repos):
    _, leaves, _ = repos
    leaves.add(1, LeaveType.SICK, date(2025, 4, 14), date(2025, 4, 15))

    svc.check_in(1, now=MORNING)


def test_check_out_sets_total_hours(svc, repos):
    attendance, _, _ = repos
    svc.check_in(1, now=MORNING)

    data = svc.check_out(1, now=EVENING)

    assert attendance.get_for_employee_and_date(1, MORNING.date()).total_hours == Decimal("8.50")
    assert data["check_out_time"] == EVENING.isoformat()


def test_check_out_without_check_in_rejected(svc):
    with pytest.raises(ValidationError):
        svc.check_out(1, now=EVENING)


def test_second_check_out_conflicts(svc):
    svc.check_in(1, now=MORNING)
    svc.check_out(1, now=EVENING)
    with pytest.raises(ConflictError):
        svc.check_out(1, now=EVENING.replace(hour=18))


def test_hours_between_rounds_to_cents():
    assert hours_between(datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 9, 20)) == Decimal("0.33")
    assert hours_between(datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 17, 45)) == Decimal("8.75")


def test_today_status_variants(svc, repos):
    _, leaves, _ = repos
    today = MORNING.date()

    assert svc.get_today_status(1, today=today)["status"] == "Absent"

    svc.check_in(1, now=MORNING)
    assert svc.get_today_status(1, today=today)["status"] == "Present"

    leaves.add(2, LeaveType.PAID, today, today, status=LeaveStatus.APPROVED)
    status = svc.get_today_status(2, today=today)
    assert status["status"] == "OnLeave"
    assert status["leave_type"] == "Paid"


def test_history_is_month_scoped_and_newest_first(svc, repos):
    attendance, _, _ = repos
    attendance.put(1, date(2025, 3, 31))
    attendance.put(1, date(2025, 4, 1))
    attendance.put(1, date(2025, 4, 2))

    rows = svc.get_history(1, month=4, year=2025)

    assert [r["date"] for r in rows] == ["2025-04-02", "2025-04-01"]


def test_attendance_summary_reads_records_and_approved_leave(svc, repos):
    attendance, leaves, _ = repos
    for d in (1, 2, 3):
        attendance.put(1, date(2025, 4, d))
    leaves.add(1, LeaveType.PAID, date(2025, 4, 7), date(2025, 4, 8), status=LeaveStatus.APPROVED)
    leaves.add(1, LeaveType.UNPAID, date(2025, 4, 9), date(2025, 4, 9), status=LeaveStatus.APPROVED)
    leaves.add(1, LeaveType.SICK, date(2025, 4, 10), date(2025, 4, 10))

    s = svc.get_attendance_summary(1, 4, 2025)

    assert s.present_days == 3
    assert s.paid_leave_days == 2
    assert s.unpaid_leave_days == 1
    assert s.sick_leave_days == 0
    assert s.payable_days == 5
    assert s.absent_days == 22 - 6


def test_team_overview(svc, repos):
    attendance, leaves, _ = repos
    day = date(2025, 4, 14)
    attendance.put(1, day)
    leaves.add(2, LeaveType.PAID, day, day, status=LeaveStatus.APPROVED)

    overview = svc.get_team_overview(day)

    assert overview == {"date": "2025-04-14", "total_employees": 3, "present": 1, "on_leave": 1, "absent": 1}


def test_ensure_employee(svc):
    svc.ensure_employee(1)
    with pytest.raises(NotFoundError):
        svc.ensure_employee(99)
