from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import SalaryBreakdown, SalaryStructure


class SalaryStructureRepository(Protocol):
    """Versioned salary structures, one row per (employee, effective_from)."""

    def upsert(self, *, employee_id: int, effective_from: date, breakdown: SalaryBreakdown) -> SalaryStructure:
        """Insert, or overwrite the version with the same effective date (last write wins)."""

        raise NotImplementedError

    def get_effective(self, employee_id: int, as_of: date) -> Optional[SalaryStructure]:
        """Latest version with effective_from <= as_of."""

        raise NotImplementedError

    def get_latest(self, employee_id: int) -> Optional[SalaryStructure]:
        raise NotImplementedError

    def list_history(self, employee_id: int) -> Sequence[SalaryStructure]:
        """All versions, newest effective date first."""

        raise NotImplementedError

    def summary_stats(self) -> dict:
        """employees_with_salary, total_monthly_payroll, average_salary over current versions."""

        raise NotImplementedError

    def list_all_current(self) -> Sequence[dict]:
        """Every active employee with their latest structure fields (None when absent)."""

        raise NotImplementedError
