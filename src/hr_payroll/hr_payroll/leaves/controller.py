from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import json_body, query_int, query_period, success
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ValidationError
from ..container import Container
from ..users.auth import build_guards, current_user, require_self_or_admin
from .service import parse_leave_status, parse_leave_type


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.auth_service)
    service = container.leave_service

    def _required_date(body: dict, key: str):
        raw = body.get(key)
        if not raw:
            raise ValidationError(f"{key} is required")
        return parse_iso_date(str(raw))

    @app.route("/api/leaves/request", methods=["POST"], endpoint="leave_request")
    @login_required
    def request_leave():
        body = json_body()
        leave = service.request_leave(
            employee_id=current_user().employee_id,
            leave_type=parse_leave_type(str(body.get("leave_type") or "")),
            start_date=_required_date(body, "start_date"),
            end_date=_required_date(body, "end_date"),
            reason=body.get("reason"),
        )
        return success(leave.to_dict(), "Leave request submitted successfully", 201)

    @app.route("/api/leaves/balance", methods=["GET"], endpoint="leave_my_balance")
    @login_required
    def my_balance():
        year = query_int("year", now_local().year)
        return success(service.get_balance(current_user().employee_id, year).to_dict())

    @app.route("/api/leaves/balance/<int:employee_id>", methods=["GET"], endpoint="leave_balance")
    @login_required
    def balance(employee_id: int):
        require_self_or_admin(employee_id)
        year = query_int("year", now_local().year)
        return success(service.get_balance(employee_id, year).to_dict())

    @app.route("/api/leaves/my", methods=["GET"], endpoint="leave_my")
    @login_required
    def my_leaves():
        leaves = service.list_my_leaves(
            current_user().employee_id,
            status=parse_leave_status(request.args.get("status")),
            year=query_int("year"),
        )
        return success(list(leaves))

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="leave_cancel")
    @login_required
    def cancel(leave_id: int):
        service.cancel_leave(leave_id=leave_id, employee_id=current_user().employee_id)
        return success(None, "Leave request cancelled")

    @app.route("/api/leaves/calendar", methods=["GET"], endpoint="leave_calendar")
    @login_required
    def calendar_view():
        year, month = query_period()
        return success(service.get_leave_calendar(year, month))

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="leave_pending")
    @admin_required
    def pending():
        return success(service.list_pending())

    @app.route("/api/leaves/all", methods=["GET"], endpoint="leave_all")
    @admin_required
    def all_leaves():
        return success(
            service.list_all(
                status=parse_leave_status(request.args.get("status")),
                employee_id=query_int("employee_id"),
                year=query_int("year"),
                page=query_int("page", 1),
                limit=query_int("limit", DEFAULT_PAGE_SIZE),
            )
        )

    @app.route("/api/leaves/summary", methods=["GET"], endpoint="leave_summary")
    @admin_required
    def team_summary():
        return success(service.get_team_summary(now_local().date()))

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["PUT"], endpoint="leave_approve")
    @admin_required
    def approve(leave_id: int):
        leave = service.approve_leave(leave_id=leave_id, admin_id=current_user().employee_id)
        return success(leave.to_dict(), "Leave request approved")

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["PUT"], endpoint="leave_reject")
    @admin_required
    def reject(leave_id: int):
        body = request.get_json(silent=True) or {}
        leave = service.reject_leave(
            leave_id=leave_id,
            admin_id=current_user().employee_id,
            rejection_reason=body.get("rejection_reason") if isinstance(body, dict) else None,
        )
        return success(leave.to_dict(), "Leave request rejected")
