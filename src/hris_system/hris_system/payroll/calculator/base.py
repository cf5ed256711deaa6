from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence, TypeVar

from ...core.constants import MIN_VACATION_DAYS, VACATION_TABLE
from ...core.enums import PayPeriod
from ...core.exceptions import MissingRateDataError, ValidationError
from ..repository import PayrollRateRepository

MIN_FISCAL_YEAR = 2000
MAX_FISCAL_YEAR = 2100

T = TypeVar("T")


def parse_period(value) -> PayPeriod:
    if isinstance(value, PayPeriod):
        return value
    try:
        return PayPeriod(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in PayPeriod)
        raise ValidationError(f"period must be one of: {allowed}")


def parse_year(value) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("year must be an integer")
    if not MIN_FISCAL_YEAR <= year <= MAX_FISCAL_YEAR:
        raise ValidationError(f"year {year} is out of range")
    return year


def find_bracket(brackets: Sequence[T], amount: Decimal) -> T:
    """Last bracket whose lower limit is <= amount (first bracket below the table)."""

    chosen = brackets[0]
    for bracket in brackets:
        if bracket.lower_limit <= amount:
            chosen = bracket
        else:
            break
    return chosen


def vacation_days_for(years_of_service: int) -> int:
    # The first year of service already earns the minimum entitlement.
    years = max(int(years_of_service), 1)
    days = MIN_VACATION_DAYS
    for min_years, entitled in VACATION_TABLE:
        if min_years <= years:
            days = entitled
    return days


class StatutoryCalculator(ABC):
    """Calculator interface (Strategy Pattern for statutory concepts).

    Every calculator reads its lookup tables once per call from the rate repository.
    """

    def __init__(self, rates: PayrollRateRepository):
        self._rates = rates

    @property
    @abstractmethod
    def concept(self) -> str:
        raise NotImplementedError

    def _uma_daily(self, year: int) -> Decimal:
        uma = self._rates.get_uma(year=year)
        if uma is None or uma <= 0:
            raise MissingRateDataError(f"No UMA value configured for {year}")
        return uma
