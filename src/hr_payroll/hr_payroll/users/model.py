from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee (user account).

    Plain data object; no database access here.
    """

    employee_id: int
    login_id: str
    first_name: str
    last_name: str
    role: Role
    department: Optional[str]
    joining_date: Optional[date]
    password_hash: str = ""
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from a verified bearer token."""

    employee_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
