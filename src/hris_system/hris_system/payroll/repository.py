from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayPeriod
from .model import ImssRate, IsrBracket, SubsidyBracket


class PayrollRateRepository(Protocol):
    """Statutory lookup tables, keyed by fiscal year.

    Implementations return empty sequences / None when a table is missing; the
    calculators turn that into MissingRateDataError.
    """

    def get_isr_brackets(self, *, year: int, period: PayPeriod) -> Sequence[IsrBracket]:
        raise NotImplementedError

    def get_subsidy_brackets(self, *, year: int, period: PayPeriod) -> Sequence[SubsidyBracket]:
        raise NotImplementedError

    def get_imss_rates(self, *, year: int) -> Sequence[ImssRate]:
        raise NotImplementedError

    def get_uma(self, *, year: int) -> Optional[Decimal]:
        """Daily UMA value."""

        raise NotImplementedError

    def get_isn_rate(self, *, state_code: str, year: int) -> Optional[Decimal]:
        raise NotImplementedError
