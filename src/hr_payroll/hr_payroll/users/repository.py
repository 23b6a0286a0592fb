from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_login_id(self, login_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_active_with_salary_structure(self) -> Sequence[Employee]:
        """Active employees (role Employee) having at least one salary structure, ordered by first name."""

        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
