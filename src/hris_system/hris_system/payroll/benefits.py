"""Mexican statutory benefits (LFT): aguinaldo, vacation, PTU and finiquito.

Exemption caps are expressed in UMA and read from the rate repository for the
calculation year, like the payroll calculators.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import full_years_between, last_anniversary, today_local
from ..common.money import round_money
from ..common.validators import require_positive
from ..core.constants import (
    AGUINALDO_DAYS,
    AGUINALDO_EXEMPT_UMAS,
    CONSTITUTIONAL_INDEMNITY_DAYS,
    DAYS_PER_YEAR,
    HALF_YEAR_DAYS,
    INDEMNITY_DAYS_PER_YEAR,
    SEPARATION_EXEMPT_UMAS_PER_YEAR,
    SENIORITY_PREMIUM_CAP_UMAS,
    SENIORITY_PREMIUM_DAYS_PER_YEAR,
    SENIORITY_PREMIUM_MIN_YEARS,
    VACATION_PREMIUM_EXEMPT_UMAS,
    VACATION_PREMIUM_RATE,
)
from ..core.enums import TerminationType
from ..core.exceptions import ValidationError
from .calculator.base import StatutoryCalculator, parse_year, vacation_days_for
from .model import BenefitLine, BenefitsResult

HALF = Decimal("0.5")


class MexicanBenefitsCalculator(StatutoryCalculator):
    concept = "LFT benefits"

    def aguinaldo(
        self,
        *,
        daily_salary,
        year,
        hire_date: date,
        termination_date: Optional[date] = None,
        aguinaldo_days=AGUINALDO_DAYS,
    ) -> BenefitsResult:
        salary = require_positive(daily_salary, "daily_salary")
        year = parse_year(year)
        entitled = require_positive(aguinaldo_days, "aguinaldo_days")
        if entitled < AGUINALDO_DAYS:
            raise ValidationError(f"aguinaldo_days cannot be lower than the statutory {AGUINALDO_DAYS}")

        start = max(hire_date, date(year, 1, 1))
        end = min(termination_date or date(year, 12, 31), date(year, 12, 31))
        if end < start:
            raise ValidationError(f"No days worked in {year}")
        days_worked = min((end - start).days + 1, DAYS_PER_YEAR)

        proportional_days = entitled * days_worked / DAYS_PER_YEAR
        gross = proportional_days * salary
        exempt = min(gross, self._uma_daily(year) * AGUINALDO_EXEMPT_UMAS)
        return BenefitsResult(
            kind="aguinaldo",
            lines=[
                BenefitLine(
                    concept="Aguinaldo",
                    days=round_money(proportional_days),
                    daily_rate=salary,
                    amount=round_money(gross),
                    exempt=round_money(exempt),
                    taxable=round_money(gross - exempt),
                )
            ],
        )

    def vacation(self, *, daily_salary, year, hire_date: date, as_of: Optional[date] = None) -> BenefitsResult:
        salary = require_positive(daily_salary, "daily_salary")
        year = parse_year(year)
        as_of = as_of or today_local()
        if as_of < hire_date:
            raise ValidationError("hire_date cannot be after the calculation date")

        days = vacation_days_for(full_years_between(hire_date, as_of))
        pay = days * salary
        premium = pay * VACATION_PREMIUM_RATE
        premium_exempt = min(premium, self._uma_daily(year) * VACATION_PREMIUM_EXEMPT_UMAS)
        return BenefitsResult(
            kind="vacation",
            lines=[
                BenefitLine(
                    concept="Vacation days",
                    days=Decimal(days),
                    daily_rate=salary,
                    amount=round_money(pay),
                    taxable=round_money(pay),
                ),
                BenefitLine(
                    concept="Vacation premium (25%)",
                    days=Decimal(days),
                    daily_rate=round_money(salary * VACATION_PREMIUM_RATE),
                    amount=round_money(premium),
                    exempt=round_money(premium_exempt),
                    taxable=round_money(premium - premium_exempt),
                ),
            ],
        )

    def ptu(
        self,
        *,
        pool,
        days_worked,
        total_company_days,
        employee_annual_salary,
        total_company_salaries,
    ) -> BenefitsResult:
        """Profit sharing: half of the pool by days worked, half by salaries earned."""

        pool = require_positive(pool, "pool")
        days = require_positive(days_worked, "days_worked")
        company_days = require_positive(total_company_days, "total_company_days")
        salary = require_positive(employee_annual_salary, "employee_annual_salary")
        company_salaries = require_positive(total_company_salaries, "total_company_salaries")
        if days > company_days or salary > company_salaries:
            raise ValidationError("Employee figures cannot exceed company totals")

        days_share = days / company_days * pool * HALF
        salary_share = salary / company_salaries * pool * HALF
        return BenefitsResult(
            kind="ptu",
            lines=[
                BenefitLine(concept="PTU by days worked", amount=round_money(days_share), taxable=round_money(days_share)),
                BenefitLine(concept="PTU by salary", amount=round_money(salary_share), taxable=round_money(salary_share)),
            ],
        )

    def finiquito(
        self,
        *,
        daily_salary,
        hire_date: date,
        termination_date: date,
        termination_type: TerminationType = TerminationType.VOLUNTARY,
    ) -> BenefitsResult:
        """Final settlement; unjustified dismissal turns it into a liquidación.

        Aguinaldo is prorated by days worked in the termination year, vacation by days
        worked since the last work anniversary and pending salary by days worked in the
        termination month. Separation payments accrue for the fraction of the final
        year too.
        """

        salary = require_positive(daily_salary, "daily_salary")
        if termination_date <= hire_date:
            raise ValidationError("termination_date must be after hire_date")
        termination_type = TerminationType(termination_type)
        uma = self._uma_daily(termination_date.year)

        years = full_years_between(hire_date, termination_date)
        service_year_days = (termination_date - last_anniversary(hire_date, termination_date)).days + 1
        service_year_fraction = Decimal(min(service_year_days, DAYS_PER_YEAR)) / DAYS_PER_YEAR
        lines: list[BenefitLine] = []

        year_start = max(hire_date, date(termination_date.year, 1, 1))
        year_days = min((termination_date - year_start).days + 1, DAYS_PER_YEAR)
        aguinaldo_days = Decimal(AGUINALDO_DAYS * year_days) / DAYS_PER_YEAR
        aguinaldo = aguinaldo_days * salary
        aguinaldo_exempt = min(aguinaldo, uma * AGUINALDO_EXEMPT_UMAS)
        lines.append(
            BenefitLine(
                concept="Proportional aguinaldo",
                days=round_money(aguinaldo_days),
                daily_rate=salary,
                amount=round_money(aguinaldo),
                exempt=round_money(aguinaldo_exempt),
                taxable=round_money(aguinaldo - aguinaldo_exempt),
            )
        )

        vacation_days = vacation_days_for(years + 1) * service_year_fraction
        vacation_pay = vacation_days * salary
        lines.append(
            BenefitLine(
                concept="Proportional vacation",
                days=round_money(vacation_days),
                daily_rate=salary,
                amount=round_money(vacation_pay),
                taxable=round_money(vacation_pay),
            )
        )
        premium = vacation_pay * VACATION_PREMIUM_RATE
        premium_exempt = min(premium, uma * VACATION_PREMIUM_EXEMPT_UMAS)
        lines.append(
            BenefitLine(
                concept="Vacation premium (25%)",
                amount=round_money(premium),
                exempt=round_money(premium_exempt),
                taxable=round_money(premium - premium_exempt),
            )
        )

        month_start = date(termination_date.year, termination_date.month, 1)
        pending_days = Decimal((termination_date - max(hire_date, month_start)).days + 1)
        pending = round_money(pending_days * salary)
        lines.append(
            BenefitLine(concept="Pending salary", days=pending_days, daily_rate=salary, amount=pending, taxable=pending)
        )

        unjustified = termination_type == TerminationType.UNJUSTIFIED
        service_years = years + service_year_fraction
        separation: list[tuple[str, Decimal, Decimal]] = []
        if years >= SENIORITY_PREMIUM_MIN_YEARS or unjustified:
            capped_rate = round_money(min(salary, uma * SENIORITY_PREMIUM_CAP_UMAS))
            separation.append(("Seniority premium", SENIORITY_PREMIUM_DAYS_PER_YEAR * service_years, capped_rate))
        if unjustified:
            separation.append(("Constitutional indemnity (3 months)", Decimal(CONSTITUTIONAL_INDEMNITY_DAYS), salary))
            separation.append(("20 days per year of service", INDEMNITY_DAYS_PER_YEAR * service_years, salary))

        exempt_years = years + (1 if service_year_days > HALF_YEAR_DAYS else 0)
        exempt_left = round_money(uma * SEPARATION_EXEMPT_UMAS_PER_YEAR * exempt_years)
        for concept, days, rate in separation:
            amount = round_money(days * rate)
            exempt = min(amount, exempt_left)
            exempt_left -= exempt
            lines.append(
                BenefitLine(
                    concept=concept,
                    days=round_money(days),
                    daily_rate=rate,
                    amount=amount,
                    exempt=exempt,
                    taxable=amount - exempt,
                )
            )

        return BenefitsResult(kind="finiquito" if not unjustified else "liquidacion", lines=lines)
