from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.money import round_money
from ..common.validators import require_positive
from ..core.constants import PERIOD_DAYS
from ..core.enums import PayPeriod, TerminationType
from ..core.exceptions import ValidationError
from .benefits import MexicanBenefitsCalculator
from .calculator.base import parse_period, parse_year
from .calculator.imss_calculator import ImssCalculator
from .calculator.isn_calculator import IsnCalculator
from .calculator.isr_calculator import IsrCalculator
from .calculator.sdi_calculator import SdiCalculator
from .model import BenefitsResult, ImssResult, IsnResult, IsrResult, PayrollCalculation, SdiResult
from .repository import PayrollRateRepository

logger = logging.getLogger(__name__)


class MexicanPayrollService:
    """Use cases behind the Mexican payroll endpoints.

    Each call is a pure calculation over rate tables fetched once at the start; nothing
    is persisted.
    """

    def __init__(
        self,
        rates: PayrollRateRepository,
        *,
        isr: Optional[IsrCalculator] = None,
        imss: Optional[ImssCalculator] = None,
        sdi: Optional[SdiCalculator] = None,
        isn: Optional[IsnCalculator] = None,
        benefits: Optional[MexicanBenefitsCalculator] = None,
    ):
        self._isr = isr or IsrCalculator(rates)
        self._imss = imss or ImssCalculator(rates)
        self._sdi = sdi or SdiCalculator(rates)
        self._isn = isn or IsnCalculator(rates)
        self._benefits = benefits or MexicanBenefitsCalculator(rates)

    def calculate_isr(self, *, gross_income, period, year, exempt_income=0, apply_subsidy: bool = False) -> IsrResult:
        result = self._isr.calculate(
            gross_income=gross_income,
            period=period,
            year=year,
            exempt_income=exempt_income,
            apply_subsidy=apply_subsidy,
        )
        logger.debug("ISR %s %s: taxable=%s net=%s", result.year, result.period.value, result.taxable_income, result.net_tax)
        return result

    def calculate_imss(self, *, sbc, year, days=None, period=None, risk_class=None, risk_premium=None) -> ImssResult:
        return self._imss.calculate(
            sbc=sbc,
            year=year,
            days=days,
            period=period,
            risk_class=risk_class,
            risk_premium=risk_premium,
        )

    def calculate_sdi(self, **kwargs) -> SdiResult:
        return self._sdi.calculate(**kwargs)

    def calculate_isn(self, *, taxable_payroll, state_code: str, year) -> IsnResult:
        return self._isn.calculate(taxable_payroll=taxable_payroll, state_code=state_code, year=year)

    def calculate_payroll(
        self,
        *,
        gross_pay,
        period,
        year,
        sbc=None,
        exempt_income=0,
        risk_class: Optional[str] = None,
        apply_subsidy: bool = False,
    ) -> PayrollCalculation:
        """Net pay for one employee and period: gross - ISR net tax - IMSS employee quotas."""

        gross = require_positive(gross_pay, "gross_pay")
        period: PayPeriod = parse_period(period)
        year = parse_year(year)
        days = PERIOD_DAYS[period]
        daily_base = require_positive(sbc, "sbc") if sbc not in (None, "") else gross / days

        isr = self.calculate_isr(
            gross_income=gross,
            period=period,
            year=year,
            exempt_income=exempt_income,
            apply_subsidy=apply_subsidy,
        )
        imss = self.calculate_imss(sbc=daily_base, year=year, days=days, risk_class=risk_class)

        total_deductions = isr.net_tax + imss.employee_total
        net_pay = round_money(gross - total_deductions)
        if net_pay < 0:
            raise ValidationError("Statutory deductions exceed gross pay")

        logger.info(
            "payroll %s %s: gross=%s deductions=%s net=%s",
            year,
            period.value,
            round_money(gross),
            total_deductions,
            net_pay,
        )
        return PayrollCalculation(
            period=period,
            year=year,
            gross_pay=round_money(gross),
            isr=isr,
            imss=imss,
            total_deductions=total_deductions,
            net_pay=net_pay,
        )

    # Benefits
    def calculate_aguinaldo(self, **kwargs) -> BenefitsResult:
        return self._benefits.aguinaldo(**kwargs)

    def calculate_vacation(self, **kwargs) -> BenefitsResult:
        return self._benefits.vacation(**kwargs)

    def calculate_ptu(self, **kwargs) -> BenefitsResult:
        return self._benefits.ptu(**kwargs)

    def calculate_finiquito(
        self,
        *,
        daily_salary,
        hire_date: date,
        termination_date: date,
        termination_type=TerminationType.VOLUNTARY,
    ) -> BenefitsResult:
        try:
            termination_type = TerminationType(termination_type)
        except ValueError:
            raise ValidationError("termination_type must be voluntary, justified or unjustified")
        return self._benefits.finiquito(
            daily_salary=daily_salary,
            hire_date=hire_date,
            termination_date=termination_date,
            termination_type=termination_type,
        )
