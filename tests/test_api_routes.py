from datetime import date
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.container import wire_container
from src.hr_payroll.hr_payroll.core.enums import LeaveStatus, LeaveType, Role
from src.hr_payroll.hr_payroll.main import create_app
from tests.fakes import InMemoryAttendance, InMemoryEmployees, InMemoryLeaves, InMemorySalaries, make_employee

APRIL_WEEKDAYS = [date(2025, 4, d) for d in range(1, 31) if date(2025, 4, d).weekday() < 5]


@pytest.fixture
def container(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    salaries = InMemorySalaries()
    employees = InMemoryEmployees(
        [
            make_employee(1, login_id="EMP0001", first_name="Anna", password="pw"),
            make_employee(2, login_id="EMP0002", first_name="Binh", password="pw"),
            make_employee(9, login_id="ADMIN0001", first_name="Admin", role=Role.ADMIN, password="pw"),
        ],
        salaries=salaries,
    )
    attendance = InMemoryAttendance()
    return wire_container(
        conn=None,
        employees_repo=employees,
        attendance_repo=attendance,
        leaves_repo=InMemoryLeaves(attendance),
        salaries_repo=salaries,
        secret_key="test-secret",
    )


@pytest.fixture
def client(container):
    app = create_app(container)
    return app.test_client()


def bearer(container, employee_id: int) -> dict:
    token = container.auth_service.issue_token(container.employees_repo.get_by_id(employee_id))
    return {"Authorization": f"Bearer {token}"}


def test_login_returns_token_usable_on_me(client):
    res = client.post("/api/auth/login", json={"login_id": "EMP0001", "password": "pw"})
    assert res.status_code == 200
    token = res.get_json()["data"]["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.get_json()["data"]["login_id"] == "EMP0001"


def test_login_with_wrong_password_is_401(client):
    res = client.post("/api/auth/login", json={"login_id": "EMP0001", "password": "nope"})

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Invalid login ID or password"}


def test_missing_token_is_401(client):
    assert client.get("/api/payroll/my-payslip").status_code == 401


def test_employee_cannot_use_admin_routes(client, container):
    res = client.post("/api/payroll/generate", json={"year": 2025, "month": 4}, headers=bearer(container, 1))
    assert res.status_code == 403


def test_employee_cannot_read_other_payslip(client, container):
    res = client.get("/api/payroll/payslip/2?year=2025&month=4", headers=bearer(container, 1))
    assert res.status_code == 403


def test_payslip_without_structure_is_404(client, container):
    res = client.get("/api/payroll/my-payslip?year=2025&month=4", headers=bearer(container, 1))

    assert res.status_code == 404
    assert res.get_json()["message"] == "No salary structure found for this employee"


def test_admin_sets_salary_and_employee_reads_payslip(client, container):
    admin = bearer(container, 9)
    res = client.post(
        "/api/payroll/salary/1",
        json={"month_wage": "50000", "effective_from": "2025-01-01"},
        headers=admin,
    )
    assert res.status_code == 200
    assert res.get_json()["data"]["fixed_allowance"] == "4168.00"

    for d in APRIL_WEEKDAYS:
        container.attendance_repo.put(1, d)

    slip = client.get("/api/payroll/my-payslip?year=2025&month=4", headers=bearer(container, 1)).get_json()["data"]

    assert slip["net_salary"] == "46800.00"
    assert slip["attendance"]["payable_days"] == 22
    assert slip["period"] == {"year": 2025, "month": 4, "month_name": "April"}


def test_salary_with_invalid_wage_is_400(client, container):
    res = client.post(
        "/api/payroll/salary/1",
        json={"month_wage": "-5", "effective_from": "2025-01-01"},
        headers=bearer(container, 9),
    )
    assert res.status_code == 400


def test_generate_payroll_reports_totals(client, container):
    container.payroll_service.upsert_salary_structure(
        employee_id=1, month_wage=Decimal("50000"), effective_from=date(2025, 1, 1)
    )
    container.payroll_service.upsert_salary_structure(
        employee_id=2, month_wage=Decimal("50000"), effective_from=date(2025, 6, 1)
    )
    for d in APRIL_WEEKDAYS:
        container.attendance_repo.put(1, d)

    res = client.post("/api/payroll/generate", json={"year": 2025, "month": 4}, headers=bearer(container, 9))

    data = res.get_json()["data"]
    assert res.status_code == 200
    assert data["summary"]["successful"] == 1
    assert data["summary"]["failed"] == 1
    assert data["summary"]["total_net"] == "46800.00"
    assert data["errors"][0]["employee_id"] == 2


def test_attendance_mark_flow(client, container):
    headers = bearer(container, 1)

    first = client.post("/api/attendance/mark", json={"action": "checkIn"}, headers=headers)
    again = client.post("/api/attendance/mark", json={"action": "checkIn"}, headers=headers)
    bad = client.post("/api/attendance/mark", json={"action": "lunch"}, headers=headers)

    assert first.status_code == 201
    assert again.status_code == 409
    assert bad.status_code == 400


def test_attendance_summary_is_self_or_admin(client, container):
    container.attendance_repo.put(1, date(2025, 4, 1))

    own = client.get("/api/attendance/summary/1?year=2025&month=4", headers=bearer(container, 1))
    other = client.get("/api/attendance/summary/1?year=2025&month=4", headers=bearer(container, 2))
    admin = client.get("/api/attendance/summary/1?year=2025&month=4", headers=bearer(container, 9))

    assert own.status_code == 200
    assert own.get_json()["data"]["present_days"] == 1
    assert other.status_code == 403
    assert admin.status_code == 200


def test_leave_request_overlap_is_409(client, container):
    container.leaves_repo.add(1, LeaveType.PAID, date(2025, 4, 7), date(2025, 4, 9), status=LeaveStatus.APPROVED)

    res = client.post(
        "/api/leaves/request",
        json={"leave_type": "Paid", "start_date": "2025-04-08", "end_date": "2025-04-10"},
        headers=bearer(container, 1),
    )

    assert res.status_code == 409


def test_leave_request_and_admin_approval(client, container):
    created = client.post(
        "/api/leaves/request",
        json={"leave_type": "Sick", "start_date": "2025-04-08", "end_date": "2025-04-09", "reason": "Flu"},
        headers=bearer(container, 1),
    )
    assert created.status_code == 201
    leave_id = created.get_json()["data"]["id"]

    approved = client.put(f"/api/leaves/{leave_id}/approve", headers=bearer(container, 9))
    balance = client.get("/api/leaves/balance?year=2025", headers=bearer(container, 1))

    assert approved.status_code == 200
    assert approved.get_json()["data"]["status"] == "Approved"
    assert balance.get_json()["data"]["sick_leave_used"] == 2


def test_leave_request_with_bad_date_is_400(client, container):
    res = client.post(
        "/api/leaves/request",
        json={"leave_type": "Paid", "start_date": "08/04/2025", "end_date": "2025-04-10"},
        headers=bearer(container, 1),
    )
    assert res.status_code == 400
