from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import SalaryBreakdown


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for salary breakdowns)."""

    @abstractmethod
    def calculate(self, month_wage: Decimal) -> SalaryBreakdown:
        raise NotImplementedError
