from __future__ import annotations

from flask import Flask

from ..common.http import json_body, success
from ..container import Container
from .auth import build_guards, current_user
from .service import employee_to_dict


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.auth_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        issued = container.auth_service.authenticate(
            str(body.get("login_id") or ""),
            str(body.get("password") or ""),
        )
        return success({"token": issued.token, "user": employee_to_dict(issued.employee)}, "Login successful")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        employee = container.auth_service.get_profile(current_user().employee_id)
        return success(employee_to_dict(employee))
