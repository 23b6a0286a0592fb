from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import CurrentUser
from .service import AuthService


def build_guards(auth_service: AuthService):
    """Return (login_required, admin_required) view decorators bound to ``auth_service``."""

    def _authenticate() -> CurrentUser:
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Authentication required")
        user = auth_service.verify_token(token.strip())
        g.current_user = user
        return user

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            _authenticate()
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not _authenticate().is_admin:
                raise AuthorizationError("Admin access required")
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def current_user() -> CurrentUser:
    return g.current_user


def require_self_or_admin(employee_id: int) -> None:
    user = current_user()
    if not user.is_admin and user.employee_id != int(employee_id):
        raise AuthorizationError("Access denied")
