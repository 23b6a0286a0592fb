from __future__ import annotations

from dataclasses import dataclass

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError
from .model import CurrentUser, Employee
from .repository import EmployeeRepository

_TOKEN_SALT = "hr-payroll-bearer"


@dataclass(frozen=True)
class IssuedToken:
    token: str
    employee: Employee


class AuthService:
    """Use case: authenticate an employee and verify bearer tokens."""

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        secret_key: str,
        max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    ):
        self._employees = employees
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_TOKEN_SALT)
        self._max_age = int(max_age_seconds)

    def authenticate(self, login_id: str, password: str) -> IssuedToken:
        login_id = require_non_empty(login_id, "Login ID")
        employee = self._employees.get_by_login_id(login_id)
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid login ID or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False
        if not ok:
            raise AuthenticationError("Invalid login ID or password")

        return IssuedToken(token=self.issue_token(employee), employee=employee)

    def issue_token(self, employee: Employee) -> str:
        return self._serializer.dumps({"id": employee.employee_id, "role": employee.role.value})

    def verify_token(self, token: str) -> CurrentUser:
        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Token expired")
        except BadSignature:
            raise AuthenticationError("Invalid token")

        employee = self._employees.get_by_id(int(payload["id"]))
        if not employee or not employee.is_active:
            raise AuthenticationError("Account is inactive")
        return CurrentUser(employee_id=employee.employee_id, role=employee.role)

    def get_profile(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("User not found")
        return employee


def employee_to_dict(employee: Employee) -> dict:
    return {
        "employee_id": employee.employee_id,
        "login_id": employee.login_id,
        "name": employee.full_name,
        "first_name": employee.first_name,
        "last_name": employee.last_name,
        "role": employee.role.value,
        "department": employee.department,
        "joining_date": employee.joining_date.isoformat() if employee.joining_date else None,
        "is_active": employee.is_active,
        "is_admin": employee.role == Role.ADMIN,
    }
