from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...common.money import round_money
from ...common.validators import require_non_negative, require_positive
from ...core.constants import AGUINALDO_DAYS, DAYS_PER_YEAR, SBC_CAP_UMAS, VACATION_PREMIUM_RATE
from ...core.exceptions import ValidationError
from ..model import SdiResult
from .base import StatutoryCalculator, parse_year, vacation_days_for

FACTOR_PLACES = Decimal("0.0001")


class SdiCalculator(StatutoryCalculator):
    """Integrated daily wage: daily salary times the integration factor plus variable pay."""

    concept = "SDI"

    def calculate(
        self,
        *,
        daily_salary,
        year,
        years_of_service=0,
        aguinaldo_days=AGUINALDO_DAYS,
        vacation_premium_rate=VACATION_PREMIUM_RATE,
        variable_daily=0,
    ) -> SdiResult:
        salary = require_positive(daily_salary, "daily_salary")
        year = parse_year(year)
        years = require_non_negative(years_of_service, "years_of_service")
        variable = require_non_negative(variable_daily, "variable_daily")

        aguinaldo = require_positive(aguinaldo_days, "aguinaldo_days")
        if aguinaldo < AGUINALDO_DAYS:
            raise ValidationError(f"aguinaldo_days cannot be lower than the statutory {AGUINALDO_DAYS}")
        premium = require_positive(vacation_premium_rate, "vacation_premium_rate")
        if premium < VACATION_PREMIUM_RATE or premium > 1:
            raise ValidationError("vacation_premium_rate must be between 0.25 and 1")

        vacation_days = vacation_days_for(int(years))
        factor = (1 + (aguinaldo + vacation_days * premium) / DAYS_PER_YEAR).quantize(
            FACTOR_PLACES, rounding=ROUND_HALF_UP
        )

        uma = self._uma_daily(year)
        sdi = salary * factor + variable
        return SdiResult(
            year=year,
            daily_salary=round_money(salary),
            years_of_service=int(years),
            aguinaldo_days=int(aguinaldo),
            vacation_days=vacation_days,
            vacation_premium_rate=premium,
            integration_factor=factor,
            variable_daily=round_money(variable),
            sdi=round_money(sdi),
            sdi_capped=round_money(min(sdi, uma * SBC_CAP_UMAS)),
            uma_daily=uma,
        )
