from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.money import effective_rate, percent_of, round_money
from ...common.validators import require_non_negative, require_positive
from ...core.constants import (
    DEFAULT_RISK_CLASS,
    IMSS_EXCESS_THRESHOLD_UMAS,
    PERIOD_DAYS,
    RISK_CLASS_PREMIUMS,
    SBC_CAP_UMAS,
)
from ...core.enums import ImssBase
from ...core.exceptions import MissingRateDataError, ValidationError
from ..model import ImssConceptLine, ImssResult
from .base import StatutoryCalculator, parse_period, parse_year

ZERO = Decimal("0")
MAX_RISK_PREMIUM = Decimal("15")


def resolve_days(days, period) -> int:
    if days not in (None, ""):
        value = require_positive(days, "days")
        if value != value.to_integral_value():
            raise ValidationError("days must be a whole number")
        return int(value)
    if period not in (None, ""):
        return PERIOD_DAYS[parse_period(period)]
    raise ValidationError("Either days or period is required")


def resolve_risk_premium(risk_class: Optional[str], risk_premium) -> Decimal:
    if risk_premium not in (None, ""):
        premium = require_non_negative(risk_premium, "risk_premium")
        if premium > MAX_RISK_PREMIUM:
            raise ValidationError(f"risk_premium cannot exceed {MAX_RISK_PREMIUM}%")
        return premium
    key = (risk_class or DEFAULT_RISK_CLASS).strip().upper()
    if key not in RISK_CLASS_PREMIUMS:
        raise ValidationError(f"Unknown risk class {risk_class!r} (expected I-V)")
    return RISK_CLASS_PREMIUMS[key]


class ImssCalculator(StatutoryCalculator):
    """IMSS quotas for a number of days over a capped SBC.

    Base types: percentage of SBC, fixed quota over UMA, excess of SBC over 3 UMA,
    and the employer-only work-risk premium.
    """

    concept = "IMSS"

    def calculate(
        self,
        *,
        sbc,
        year,
        days=None,
        period=None,
        risk_class: Optional[str] = None,
        risk_premium=None,
    ) -> ImssResult:
        sbc = require_positive(sbc, "sbc")
        year = parse_year(year)
        days = resolve_days(days, period)
        premium = resolve_risk_premium(risk_class, risk_premium)

        uma = self._uma_daily(year)
        rates = list(self._rates.get_imss_rates(year=year))
        if not rates:
            raise MissingRateDataError(f"No IMSS rates configured for {year}")

        sbc_capped = min(sbc, uma * SBC_CAP_UMAS)
        excess_daily = max(sbc_capped - uma * IMSS_EXCESS_THRESHOLD_UMAS, ZERO)

        lines: list[ImssConceptLine] = []
        for rate in rates:
            employer_rate = rate.employer_rate
            employee_rate = rate.employee_rate
            if rate.base == ImssBase.UMA_FIXED:
                base_amount = uma * days
            elif rate.base == ImssBase.EXCESS_3UMA:
                base_amount = excess_daily * days
            elif rate.base == ImssBase.RISK:
                base_amount = sbc_capped * days
                employer_rate, employee_rate = premium, ZERO
            else:
                base_amount = sbc_capped * days

            lines.append(
                ImssConceptLine(
                    concept=rate.concept,
                    base=rate.base,
                    base_amount=round_money(base_amount),
                    employer_rate=employer_rate,
                    employee_rate=employee_rate,
                    employer_amount=round_money(percent_of(base_amount, employer_rate)),
                    employee_amount=round_money(percent_of(base_amount, employee_rate)),
                )
            )

        employer_total = sum((line.employer_amount for line in lines), ZERO)
        employee_total = sum((line.employee_amount for line in lines), ZERO)
        return ImssResult(
            year=year,
            days=days,
            sbc=round_money(sbc),
            sbc_capped=round_money(sbc_capped),
            uma_daily=uma,
            risk_premium=premium,
            concepts=lines,
            employer_total=employer_total,
            employee_total=employee_total,
            total=employer_total + employee_total,
            effective_rate=effective_rate(employee_total, sbc_capped * days),
        )
