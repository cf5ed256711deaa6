from __future__ import annotations

from decimal import Decimal

from ...common.money import effective_rate, percent_of, round_money
from ...common.validators import require_non_negative, require_positive
from ...core.exceptions import MissingRateDataError
from ..model import IsrResult
from .base import StatutoryCalculator, find_bracket, parse_period, parse_year

ZERO = Decimal("0")


class IsrCalculator(StatutoryCalculator):
    """ISR withholding: fixed fee + marginal rate over the bracket's lower limit."""

    concept = "ISR"

    def calculate(
        self,
        *,
        gross_income,
        period,
        year,
        exempt_income=0,
        apply_subsidy: bool = False,
    ) -> IsrResult:
        gross = require_positive(gross_income, "gross_income")
        exempt = require_non_negative(exempt_income, "exempt_income")
        period = parse_period(period)
        year = parse_year(year)

        brackets = sorted(self._rates.get_isr_brackets(year=year, period=period), key=lambda b: b.lower_limit)
        if not brackets:
            raise MissingRateDataError(f"No ISR brackets configured for {year} ({period.value})")

        taxable = max(gross - exempt, ZERO)
        bracket = find_bracket(brackets, taxable)

        if taxable > 0:
            excess = max(taxable - bracket.lower_limit, ZERO)
            marginal = percent_of(excess, bracket.rate)
            fixed_fee = bracket.fixed_fee
        else:
            excess = marginal = fixed_fee = ZERO
        gross_tax = fixed_fee + marginal

        subsidy = ZERO
        if apply_subsidy:
            table = sorted(self._rates.get_subsidy_brackets(year=year, period=period), key=lambda b: b.lower_limit)
            if not table:
                raise MissingRateDataError(f"No employment subsidy table configured for {year} ({period.value})")
            row = find_bracket(table, taxable)
            if row.upper_limit is None or taxable <= row.upper_limit:
                subsidy = min(row.subsidy, gross_tax)

        net_tax = round_money(gross_tax - subsidy)
        return IsrResult(
            year=year,
            period=period,
            gross_income=round_money(gross),
            exempt_income=round_money(exempt),
            taxable_income=round_money(taxable),
            bracket=bracket,
            excess=round_money(excess),
            marginal_tax=round_money(marginal),
            fixed_fee=round_money(fixed_fee),
            gross_tax=round_money(gross_tax),
            subsidy=round_money(subsidy),
            net_tax=net_tax,
            effective_rate=effective_rate(net_tax, gross),
        )
