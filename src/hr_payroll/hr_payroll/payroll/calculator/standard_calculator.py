from __future__ import annotations

import logging
from decimal import Decimal

from ...common.money import round_money
from ...common.validators import require_positive_amount
from ...core.constants import (
    BASIC_RATE,
    HRA_RATE,
    LTA_RATE,
    MONTHS_PER_YEAR,
    PERFORMANCE_BONUS_RATE,
    PF_RATE,
    PROFESSIONAL_TAX,
    STANDARD_ALLOWANCE,
)
from ..model import SalaryBreakdown
from .base import SalaryCalculator

logger = logging.getLogger(__name__)


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: basic is half the wage, fixed allowance balances earnings to the wage.

    Intermediate figures keep full precision; each output field is rounded
    half away from zero to 2 dp.
    """

    def __init__(
        self,
        *,
        standard_allowance: Decimal = STANDARD_ALLOWANCE,
        professional_tax: Decimal = PROFESSIONAL_TAX,
    ):
        self._standard_allowance = Decimal(standard_allowance)
        self._professional_tax = Decimal(professional_tax)

    def calculate(self, month_wage) -> SalaryBreakdown:
        wage = require_positive_amount(month_wage, "Monthly wage")

        basic = wage * BASIC_RATE
        hra = basic * HRA_RATE
        bonus = basic * PERFORMANCE_BONUS_RATE
        lta = basic * LTA_RATE
        fixed = wage - (basic + hra + self._standard_allowance + bonus + lta)

        if fixed < 0:
            logger.warning("Fixed allowance is negative (%s) for monthly wage %s", round_money(fixed), wage)

        return SalaryBreakdown(
            month_wage=round_money(wage),
            yearly_wage=round_money(wage * MONTHS_PER_YEAR),
            basic_salary=round_money(basic),
            hra=round_money(hra),
            standard_allowance=round_money(self._standard_allowance),
            performance_bonus=round_money(bonus),
            lta=round_money(lta),
            fixed_allowance=round_money(fixed),
            pf_deduction=round_money(basic * PF_RATE),
            professional_tax=round_money(self._professional_tax),
        )
