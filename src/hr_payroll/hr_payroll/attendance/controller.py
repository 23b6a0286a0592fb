from __future__ import annotations

from flask import Flask

from ..common.http import json_body, query_date, query_period, success
from ..core.enums import AttendanceAction
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.auth import build_guards, current_user, require_self_or_admin


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.auth_service)
    service = container.attendance_service

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def mark():
        body = json_body()
        try:
            action = AttendanceAction(body.get("action"))
        except ValueError:
            raise ValidationError("Action must be checkIn or checkOut")

        employee_id = current_user().employee_id
        if action == AttendanceAction.CHECK_IN:
            return success(service.check_in(employee_id), "Checked in successfully", 201)
        return success(service.check_out(employee_id), "Checked out successfully")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        return success(service.get_today_status(current_user().employee_id))

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_my_history")
    @login_required
    def my_history():
        year, month = query_period()
        return success(service.get_history(current_user().employee_id, month=month, year=year))

    @app.route("/api/attendance/history/<int:employee_id>", methods=["GET"], endpoint="attendance_history")
    @admin_required
    def history(employee_id: int):
        service.ensure_employee(employee_id)
        year, month = query_period()
        return success(service.get_history(employee_id, month=month, year=year))

    @app.route("/api/attendance/summary/<int:employee_id>", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def summary(employee_id: int):
        require_self_or_admin(employee_id)
        year, month = query_period()
        return success(service.get_attendance_summary(employee_id, month, year).to_dict())

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_by_date")
    @admin_required
    def by_date():
        return success(service.list_by_date(query_date("date")))

    @app.route("/api/attendance/overview", methods=["GET"], endpoint="attendance_overview")
    @admin_required
    def overview():
        return success(service.get_team_overview(query_date("date")))
