from decimal import Decimal

import pytest

from src.hris_system.hris_system.core.exceptions import MissingRateDataError, ValidationError
from src.hris_system.hris_system.payroll.calculator.imss_calculator import ImssCalculator, resolve_days


def _line(result, concept):
    return next(line for line in result.concepts if line.concept == concept)


def test_imss_quotas_for_a_month(rates):
    result = ImssCalculator(rates).calculate(sbc=500, year=2024, days=30, risk_class="I")

    assert result.sbc_capped == Decimal("500.00")
    assert _line(result, "cuota_fija").employer_amount == Decimal("664.45")
    assert _line(result, "excedente_3uma").base_amount == Decimal("5228.70")
    assert _line(result, "excedente_3uma").employee_amount == Decimal("20.91")
    assert _line(result, "cesantia_vejez").employee_amount == Decimal("168.75")
    assert _line(result, "riesgo_trabajo").employer_amount == Decimal("81.53")
    assert _line(result, "riesgo_trabajo").employee_amount == Decimal("0.00")
    assert result.employee_total == Decimal("377.16")
    assert result.total == result.employer_total + result.employee_total


def test_sbc_is_capped_at_25_uma(rates):
    result = ImssCalculator(rates).calculate(sbc=5000, year=2024, period="monthly")

    assert result.days == 30
    assert result.sbc_capped == Decimal("2714.25")
    assert result.sbc_capped <= result.uma_daily * 25


def test_below_three_uma_has_no_excess_quota(rates):
    result = ImssCalculator(rates).calculate(sbc=300, year=2024, days=15)

    assert _line(result, "excedente_3uma").base_amount == Decimal("0.00")
    assert _line(result, "excedente_3uma").employee_amount == Decimal("0.00")


def test_explicit_risk_premium_overrides_class(rates):
    result = ImssCalculator(rates).calculate(sbc=500, year=2024, days=30, risk_premium="2.5")

    assert result.risk_premium == Decimal("2.5")
    assert _line(result, "riesgo_trabajo").employer_amount == Decimal("375.00")


def test_days_resolution():
    assert resolve_days(None, "weekly") == 7
    assert resolve_days(None, "biweekly") == 15
    assert resolve_days("31", None) == 31
    with pytest.raises(ValidationError):
        resolve_days(None, None)
    with pytest.raises(ValidationError):
        resolve_days("7.5", None)


@pytest.mark.parametrize("kwargs", [{"risk_class": "VI"}, {"risk_premium": 20}, {"sbc": -1}])
def test_invalid_imss_inputs(rates, kwargs):
    params = {"sbc": 500, "year": 2024, "days": 30, **kwargs}
    with pytest.raises(ValidationError):
        ImssCalculator(rates).calculate(**params)


def test_missing_uma_is_reported(rates):
    with pytest.raises(MissingRateDataError):
        ImssCalculator(rates).calculate(sbc=500, year=2023, days=30)
