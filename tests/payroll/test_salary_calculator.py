import logging
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardSalaryCalculator


def test_breakdown_for_fifty_thousand():
    b = StandardSalaryCalculator().calculate(Decimal("50000.00"))

    assert b.month_wage == Decimal("50000.00")
    assert b.yearly_wage == Decimal("600000.00")
    assert b.basic_salary == Decimal("25000.00")
    assert b.hra == Decimal("12500.00")
    assert b.standard_allowance == Decimal("4167.00")
    assert b.performance_bonus == Decimal("2082.50")
    assert b.lta == Decimal("2082.50")
    assert b.fixed_allowance == Decimal("4168.00")
    assert b.gross_salary == Decimal("50000.00")
    assert b.pf_deduction == Decimal("3000.00")
    assert b.professional_tax == Decimal("200.00")
    assert b.total_deductions == Decimal("3200.00")
    assert b.net_salary == Decimal("46800.00")


@pytest.mark.parametrize("wage", ["10000", "12345.67", "33333.33", "57891.23", "99999.99", "250000.01"])
def test_earnings_sum_to_wage_and_fields_follow_rates(wage):
    wage = Decimal(wage)
    b = StandardSalaryCalculator().calculate(wage)

    earnings = b.basic_salary + b.hra + b.standard_allowance + b.performance_bonus + b.lta + b.fixed_allowance
    assert abs(earnings - wage) <= Decimal("0.02")
    assert b.basic_salary == (wage * Decimal("0.5")).quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")
    assert b.pf_deduction == (b.basic_salary * Decimal("0.12")).quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")


def test_calculation_is_repeatable():
    calc = StandardSalaryCalculator()
    assert calc.calculate(Decimal("43210.98")) == calc.calculate(Decimal("43210.98"))


def test_accepts_numeric_strings_and_ints():
    calc = StandardSalaryCalculator()
    assert calc.calculate("50000") == calc.calculate(50000) == calc.calculate(Decimal("50000.00"))


@pytest.mark.parametrize("wage", [0, -1, "-100.00", "abc", None])
def test_non_positive_or_non_numeric_wage_rejected(wage):
    with pytest.raises(ValidationError):
        StandardSalaryCalculator().calculate(wage)


def test_low_wage_keeps_negative_fixed_allowance_and_warns(caplog):
    with caplog.at_level(logging.WARNING):
        b = StandardSalaryCalculator().calculate(Decimal("5000"))

    # 2500 + 1250 + 4167 + 208.25 + 208.25 = 8333.50
    assert b.fixed_allowance == Decimal("-3333.50")
    assert b.gross_salary == Decimal("5000.00")
    assert "negative" in caplog.text


def test_constants_are_configurable():
    b = StandardSalaryCalculator(standard_allowance=Decimal("0"), professional_tax=Decimal("150")).calculate(
        Decimal("50000")
    )
    assert b.standard_allowance == Decimal("0.00")
    assert b.fixed_allowance == Decimal("8335.00")
    assert b.professional_tax == Decimal("150.00")
