from __future__ import annotations

import logging
from decimal import Decimal

from ...common.money import ZERO, round_money
from ...core.exceptions import ValidationError
from ..model import ProratedSalary, SalaryBreakdown

logger = logging.getLogger(__name__)


def prorate(breakdown: SalaryBreakdown, *, total_days: int, payable_days: int) -> ProratedSalary:
    """Scale a full-month breakdown by payable_days / total_days.

    Every earnings field and the PF deduction is scaled and rounded on its
    own. Professional tax is charged in full for any payable day, else 0.
    """
    total_days = int(total_days)
    payable_days = int(payable_days)
    if total_days <= 0:
        raise ValidationError("Total working days must be greater than zero")
    if payable_days < 0:
        raise ValidationError("Payable days cannot be negative")

    exceeds = payable_days > total_days
    if exceeds:
        logger.warning("Payable days (%s) exceed working days (%s)", payable_days, total_days)

    ratio = Decimal(payable_days) / Decimal(total_days)

    def scale(value: Decimal) -> Decimal:
        return round_money(value * ratio)

    gross = scale(breakdown.gross_salary)
    pf = scale(breakdown.pf_deduction)
    pt = breakdown.professional_tax if payable_days > 0 else ZERO

    return ProratedSalary(
        total_days=total_days,
        payable_days=payable_days,
        ratio=ratio,
        basic_salary=scale(breakdown.basic_salary),
        hra=scale(breakdown.hra),
        standard_allowance=scale(breakdown.standard_allowance),
        performance_bonus=scale(breakdown.performance_bonus),
        lta=scale(breakdown.lta),
        fixed_allowance=scale(breakdown.fixed_allowance),
        gross_salary=gross,
        pf_deduction=pf,
        professional_tax=pt,
        loss_of_pay=breakdown.gross_salary - gross,
        net_salary=gross - pf - pt,
        exceeds_working_days=exceeds,
    )
