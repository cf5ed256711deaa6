from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from ..common.money import as_float
from ..core.enums import ImssBase, PayPeriod


@dataclass(frozen=True)
class IsrBracket:
    """One row of the ISR tariff (Anexo 8 RMF) for a year and pay period.

    `rate` is the marginal percentage applied over `lower_limit`.
    """

    lower_limit: Decimal
    upper_limit: Optional[Decimal]
    fixed_fee: Decimal
    rate: Decimal

    def to_dict(self) -> dict:
        return {
            "lowerLimit": as_float(self.lower_limit),
            "upperLimit": as_float(self.upper_limit),
            "fixedFee": as_float(self.fixed_fee),
            "rate": float(self.rate),
        }


@dataclass(frozen=True)
class SubsidyBracket:
    lower_limit: Decimal
    upper_limit: Optional[Decimal]
    subsidy: Decimal


@dataclass(frozen=True)
class ImssRate:
    """IMSS contribution concept with employer/employee percentages."""

    concept: str
    base: ImssBase
    employer_rate: Decimal
    employee_rate: Decimal


@dataclass(frozen=True)
class IsrResult:
    year: int
    period: PayPeriod
    gross_income: Decimal
    exempt_income: Decimal
    taxable_income: Decimal
    bracket: IsrBracket
    excess: Decimal
    marginal_tax: Decimal
    fixed_fee: Decimal
    gross_tax: Decimal
    subsidy: Decimal
    net_tax: Decimal
    effective_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "period": self.period.value,
            "grossIncome": as_float(self.gross_income),
            "exemptIncome": as_float(self.exempt_income),
            "taxableIncome": as_float(self.taxable_income),
            "bracket": self.bracket.to_dict(),
            "excess": as_float(self.excess),
            "marginalTax": as_float(self.marginal_tax),
            "fixedFee": as_float(self.fixed_fee),
            "grossTax": as_float(self.gross_tax),
            "subsidy": as_float(self.subsidy),
            "netTax": as_float(self.net_tax),
            "effectiveRate": as_float(self.effective_rate),
        }


@dataclass(frozen=True)
class ImssConceptLine:
    concept: str
    base: ImssBase
    base_amount: Decimal
    employer_rate: Decimal
    employee_rate: Decimal
    employer_amount: Decimal
    employee_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "concept": self.concept,
            "base": self.base.value,
            "baseAmount": as_float(self.base_amount),
            "employerRate": float(self.employer_rate),
            "employeeRate": float(self.employee_rate),
            "employerAmount": as_float(self.employer_amount),
            "employeeAmount": as_float(self.employee_amount),
        }


@dataclass(frozen=True)
class ImssResult:
    year: int
    days: int
    sbc: Decimal
    sbc_capped: Decimal
    uma_daily: Decimal
    risk_premium: Decimal
    concepts: list[ImssConceptLine]
    employer_total: Decimal
    employee_total: Decimal
    total: Decimal
    effective_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "days": self.days,
            "sbc": as_float(self.sbc),
            "sbcCapped": as_float(self.sbc_capped),
            "umaDaily": as_float(self.uma_daily),
            "riskPremium": float(self.risk_premium),
            "concepts": [c.to_dict() for c in self.concepts],
            "employerTotal": as_float(self.employer_total),
            "employeeTotal": as_float(self.employee_total),
            "total": as_float(self.total),
            "effectiveRate": as_float(self.effective_rate),
        }


@dataclass(frozen=True)
class SdiResult:
    year: int
    daily_salary: Decimal
    years_of_service: int
    aguinaldo_days: int
    vacation_days: int
    vacation_premium_rate: Decimal
    integration_factor: Decimal
    variable_daily: Decimal
    sdi: Decimal
    sdi_capped: Decimal
    uma_daily: Decimal

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "dailySalary": as_float(self.daily_salary),
            "yearsOfService": self.years_of_service,
            "aguinaldoDays": self.aguinaldo_days,
            "vacationDays": self.vacation_days,
            "vacationPremiumRate": float(self.vacation_premium_rate),
            "integrationFactor": float(self.integration_factor),
            "variableDaily": as_float(self.variable_daily),
            "sdi": as_float(self.sdi),
            "sdiCapped": as_float(self.sdi_capped),
            "umaDaily": as_float(self.uma_daily),
        }


@dataclass(frozen=True)
class IsnResult:
    year: int
    state_code: str
    taxable_payroll: Decimal
    rate: Decimal
    tax: Decimal
    effective_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "state": self.state_code,
            "taxablePayroll": as_float(self.taxable_payroll),
            "rate": float(self.rate),
            "tax": as_float(self.tax),
            "effectiveRate": as_float(self.effective_rate),
        }


@dataclass(frozen=True)
class PayrollCalculation:
    """Per-employee payroll for one period: gross, statutory deductions, net."""

    period: PayPeriod
    year: int
    gross_pay: Decimal
    isr: IsrResult
    imss: ImssResult
    total_deductions: Decimal
    net_pay: Decimal

    def to_dict(self) -> dict:
        return {
            "period": self.period.value,
            "year": self.year,
            "grossPay": as_float(self.gross_pay),
            "isr": self.isr.to_dict(),
            "imss": self.imss.to_dict(),
            "totalDeductions": as_float(self.total_deductions),
            "netPay": as_float(self.net_pay),
        }


@dataclass(frozen=True)
class BenefitLine:
    concept: str
    amount: Decimal
    days: Optional[Decimal] = None
    daily_rate: Optional[Decimal] = None
    exempt: Decimal = Decimal("0")
    taxable: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "concept": self.concept,
            "days": float(self.days) if self.days is not None else None,
            "dailyRate": as_float(self.daily_rate),
            "amount": as_float(self.amount),
            "exempt": as_float(self.exempt),
            "taxable": as_float(self.taxable),
        }


@dataclass(frozen=True)
class BenefitsResult:
    kind: str
    lines: list[BenefitLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "lines": [line.to_dict() for line in self.lines],
            "total": as_float(self.total),
        }
