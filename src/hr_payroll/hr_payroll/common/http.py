from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import now_local, parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def success(data: Any = None, message: str = "Success", status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def error(message: str = "Error", status: int = 500, errors: Optional[list] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def status_for(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        if status >= 401:
            logger.info("%s %s -> %s: %s", request.method, request.path, status, exc)
        return error(str(exc), status)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {raw!r}")


def query_period() -> tuple[int, int]:
    """(year, month) from the query string, defaulting to the current month."""
    today = now_local().date()
    year = query_int("year", today.year)
    month = query_int("month", today.month)
    return int(year), int(month)


def query_date(name: str) -> date:
    raw = request.args.get(name)
    if not raw:
        return now_local().date()
    return parse_iso_date(raw)
