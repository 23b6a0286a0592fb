from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, query_period, success
from ..common.validators import require_positive_int
from ..container import Container
from ..users.auth import build_guards, current_user, require_self_or_admin


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.auth_service)
    service = container.payroll_service

    @app.route("/api/payroll/my-payslip", methods=["GET"], endpoint="payroll_my_payslip")
    @login_required
    def my_payslip():
        year, month = query_period()
        return success(service.compute_payslip(current_user().employee_id, year, month).to_dict())

    @app.route("/api/payroll/payslip/<int:employee_id>", methods=["GET"], endpoint="payroll_payslip")
    @login_required
    def payslip(employee_id: int):
        require_self_or_admin(employee_id)
        year, month = query_period()
        return success(service.compute_payslip(employee_id, year, month).to_dict())

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @admin_required
    def generate():
        year, month = query_period()
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            year = require_positive_int(body.get("year", year), "year")
            month = require_positive_int(body.get("month", month), "month")
        run = service.generate_monthly_payroll(year, month)
        return success(run.to_dict(), "Payroll generated")

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @admin_required
    def summary():
        return success(service.get_payroll_summary())

    @app.route("/api/payroll/employees", methods=["GET"], endpoint="payroll_employees")
    @admin_required
    def employees():
        return success(service.list_all_salaries())

    @app.route("/api/payroll/salary/<int:employee_id>", methods=["GET"], endpoint="payroll_salary")
    @login_required
    def get_salary(employee_id: int):
        require_self_or_admin(employee_id)
        return success(service.get_salary_structure(employee_id).to_dict())

    @app.route("/api/payroll/salary/<int:employee_id>", methods=["POST"], endpoint="payroll_salary_upsert")
    @admin_required
    def upsert_salary(employee_id: int):
        body = json_body()
        raw_date = body.get("effective_from")
        structure = service.upsert_salary_structure(
            employee_id=employee_id,
            month_wage=body.get("month_wage"),
            effective_from=parse_iso_date(str(raw_date)) if raw_date else None,
        )
        return success(structure.to_dict(), "Salary structure saved")

    @app.route("/api/payroll/salary/<int:employee_id>/history", methods=["GET"], endpoint="payroll_salary_history")
    @admin_required
    def salary_history(employee_id: int):
        return success([s.to_dict() for s in service.get_salary_history(employee_id)])
