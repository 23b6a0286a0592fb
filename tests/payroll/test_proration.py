from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.calculator.proration import prorate
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardSalaryCalculator

FIELDS = ("basic_salary", "hra", "standard_allowance", "performance_bonus", "lta", "fixed_allowance", "pf_deduction")


@pytest.fixture
def breakdown():
    return StandardSalaryCalculator().calculate(Decimal("50000"))


def test_full_attendance_leaves_breakdown_unchanged(breakdown):
    p = prorate(breakdown, total_days=22, payable_days=22)

    for name in FIELDS:
        assert getattr(p, name) == getattr(breakdown, name)
    assert p.gross_salary == breakdown.gross_salary
    assert p.professional_tax == breakdown.professional_tax
    assert p.loss_of_pay == Decimal("0.00")
    assert p.net_salary == breakdown.net_salary
    assert p.exceeds_working_days is False


def test_no_payable_days_pays_nothing(breakdown):
    p = prorate(breakdown, total_days=22, payable_days=0)

    for name in FIELDS:
        assert getattr(p, name) == Decimal("0.00")
    assert p.gross_salary == Decimal("0.00")
    assert p.professional_tax == Decimal("0.00")
    assert p.net_salary == Decimal("0.00")
    assert p.loss_of_pay == Decimal("50000.00")


def test_twenty_of_twenty_two_days(breakdown):
    p = prorate(breakdown, total_days=22, payable_days=20)

    assert p.basic_salary == Decimal("22727.27")
    assert p.hra == Decimal("11363.64")
    assert p.gross_salary == Decimal("45454.55")
    assert p.pf_deduction == Decimal("2727.27")
    assert p.professional_tax == Decimal("200.00")
    assert p.loss_of_pay == Decimal("4545.45")
    assert p.net_salary == Decimal("42527.28")


def test_zero_working_days_rejected(breakdown):
    with pytest.raises(ValidationError):
        prorate(breakdown, total_days=0, payable_days=0)


def test_negative_payable_days_rejected(breakdown):
    with pytest.raises(ValidationError):
        prorate(breakdown, total_days=22, payable_days=-1)


def test_payable_above_working_days_is_flagged_not_clamped(breakdown, caplog):
    p = prorate(breakdown, total_days=22, payable_days=23)

    assert p.exceeds_working_days is True
    assert p.gross_salary > breakdown.gross_salary
    assert "exceed" in caplog.text
