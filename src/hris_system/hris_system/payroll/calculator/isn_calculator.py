from __future__ import annotations

from ...common.money import effective_rate, percent_of, round_money
from ...common.validators import require_non_empty, require_positive
from ...core.exceptions import MissingRateDataError
from ..model import IsnResult
from .base import StatutoryCalculator, parse_year


class IsnCalculator(StatutoryCalculator):
    """State payroll tax: a single percentage keyed by state and year."""

    concept = "ISN"

    def calculate(self, *, taxable_payroll, state_code: str, year) -> IsnResult:
        payroll = require_positive(taxable_payroll, "taxable_payroll")
        state = require_non_empty(state_code, "state_code").upper()
        year = parse_year(year)

        rate = self._rates.get_isn_rate(state_code=state, year=year)
        if rate is None:
            raise MissingRateDataError(f"No ISN rate configured for state {state} in {year}")

        tax = round_money(percent_of(payroll, rate))
        return IsnResult(
            year=year,
            state_code=state,
            taxable_payroll=round_money(payroll),
            rate=rate,
            tax=tax,
            effective_rate=effective_rate(tax, payroll),
        )
