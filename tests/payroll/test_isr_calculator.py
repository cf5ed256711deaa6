from decimal import Decimal

import pytest

from src.hris_system.hris_system.core.enums import PayPeriod
from src.hris_system.hris_system.core.exceptions import MissingRateDataError, ValidationError
from src.hris_system.hris_system.payroll.calculator.isr_calculator import IsrCalculator


def test_monthly_isr_uses_fixed_fee_plus_marginal_rate(rates):
    result = IsrCalculator(rates).calculate(gross_income=10000, period="monthly", year=2024)

    assert result.period == PayPeriod.MONTHLY
    assert result.bracket.lower_limit == Decimal("6332.06")
    assert result.bracket.lower_limit <= result.taxable_income
    assert result.gross_tax == Decimal("770.90")
    assert result.net_tax == Decimal("770.90")
    assert result.subsidy == Decimal("0.00")
    assert result.effective_rate == Decimal("7.71")


def test_income_at_lower_limit_pays_only_fixed_fee(rates):
    result = IsrCalculator(rates).calculate(gross_income="6332.06", period="monthly", year=2024)

    assert result.excess == Decimal("0.00")
    assert result.net_tax == Decimal("371.83")


def test_biweekly_table_is_used_for_biweekly_period(rates):
    result = IsrCalculator(rates).calculate(gross_income=5000, period="biweekly", year=2024)

    assert result.bracket.lower_limit == Decimal("3124.36")
    # 183.45 + (5000 - 3124.36) * 10.88%
    assert result.net_tax == Decimal("387.52")


def test_fully_exempt_income_pays_no_tax(rates):
    result = IsrCalculator(rates).calculate(gross_income=3000, exempt_income=3500, period="monthly", year=2024)

    assert result.taxable_income == Decimal("0.00")
    assert result.net_tax == Decimal("0.00")


def test_subsidy_never_exceeds_the_tax(rates):
    result = IsrCalculator(rates).calculate(gross_income=5000, period="monthly", year=2024, apply_subsidy=True)

    assert result.gross_tax == Decimal("286.57")
    assert result.subsidy == Decimal("286.57")
    assert result.net_tax == Decimal("0.00")


def test_subsidy_requires_a_table_for_the_period(rates):
    with pytest.raises(MissingRateDataError):
        IsrCalculator(rates).calculate(gross_income=5000, period="biweekly", year=2024, apply_subsidy=True)


def test_missing_year_is_reported(rates):
    with pytest.raises(MissingRateDataError):
        IsrCalculator(rates).calculate(gross_income=10000, period="monthly", year=2023)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gross_income": 0, "period": "monthly", "year": 2024},
        {"gross_income": "abc", "period": "monthly", "year": 2024},
        {"gross_income": 1000, "period": "daily", "year": 2024},
        {"gross_income": 1000, "period": "monthly", "year": "next"},
        {"gross_income": 1000, "period": "monthly", "year": 2024, "exempt_income": -1},
    ],
)
def test_invalid_inputs_are_rejected(rates, kwargs):
    with pytest.raises(ValidationError):
        IsrCalculator(rates).calculate(**kwargs)
