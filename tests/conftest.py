from __future__ import annotations

from decimal import Decimal
from typing import Optional

import pytest

from src.hris_system.hris_system.core.enums import ImssBase, PayPeriod
from src.hris_system.hris_system.payroll.model import ImssRate, IsrBracket, SubsidyBracket


def D(value) -> Decimal:
    return Decimal(str(value))


MONTHLY_2024 = [
    (0.01, 746.04, 0.00, 1.92),
    (746.05, 6332.05, 14.32, 6.40),
    (6332.06, 11128.01, 371.83, 10.88),
    (11128.02, 12935.82, 893.63, 16.00),
    (12935.83, 15487.71, 1182.88, 17.92),
    (15487.72, 31236.49, 1640.18, 21.36),
    (31236.50, 49233.00, 5004.12, 23.52),
    (49233.01, 93993.90, 9236.89, 30.00),
    (93993.91, 125325.20, 22665.17, 32.00),
    (125325.21, 375975.61, 32691.18, 34.00),
    (375975.62, None, 117912.32, 35.00),
]

BIWEEKLY_2024 = [
    (0.01, 368.10, 0.00, 1.92),
    (368.11, 3124.35, 7.05, 6.40),
    (3124.36, 5490.75, 183.45, 10.88),
    (5490.76, 6382.80, 441.00, 16.00),
    (6382.81, 7641.90, 583.65, 17.92),
    (7641.91, 15412.80, 809.25, 21.36),
    (15412.81, 24292.65, 2469.15, 23.52),
    (24292.66, 46378.50, 4557.75, 30.00),
    (46378.51, 61838.10, 11183.40, 32.00),
    (61838.11, 185514.30, 16130.55, 34.00),
    (185514.31, None, 58180.35, 35.00),
]

SUBSIDY_MONTHLY_2024 = [
    (0.01, 1768.96, 407.02),
    (1768.97, 2653.38, 406.83),
    (2653.39, 3472.84, 406.62),
    (3472.85, 3537.87, 392.77),
    (3537.88, 4446.15, 382.46),
    (4446.16, 4717.18, 354.23),
    (4717.19, 5335.42, 324.87),
    (5335.43, 6224.67, 294.63),
    (6224.68, 7113.90, 253.54),
    (7113.91, 7382.33, 217.61),
    (7382.34, None, 0.00),
]

IMSS_2024 = [
    ("cuota_fija", ImssBase.UMA_FIXED, 20.40, 0),
    ("excedente_3uma", ImssBase.EXCESS_3UMA, 1.10, 0.40),
    ("prestaciones_dinero", ImssBase.SBC, 0.70, 0.25),
    ("gastos_medicos_pensionados", ImssBase.SBC, 1.05, 0.375),
    ("invalidez_vida", ImssBase.SBC, 1.75, 0.625),
    ("guarderias", ImssBase.SBC, 1.00, 0),
    ("retiro", ImssBase.SBC, 2.00, 0),
    ("cesantia_vejez", ImssBase.SBC, 3.15, 1.125),
    ("infonavit", ImssBase.SBC, 5.00, 0),
    ("riesgo_trabajo", ImssBase.RISK, 0, 0),
]


def _brackets(rows):
    return [
        IsrBracket(lower_limit=D(lo), upper_limit=D(hi) if hi is not None else None, fixed_fee=D(fee), rate=D(rate))
        for lo, hi, fee, rate in rows
    ]


class InMemoryRates:
    def __init__(self):
        self.isr = {
            (2024, PayPeriod.MONTHLY): _brackets(MONTHLY_2024),
            (2024, PayPeriod.BIWEEKLY): _brackets(BIWEEKLY_2024),
        }
        self.subsidy = {
            (2024, PayPeriod.MONTHLY): [
                SubsidyBracket(lower_limit=D(lo), upper_limit=D(hi) if hi is not None else None, subsidy=D(s))
                for lo, hi, s in SUBSIDY_MONTHLY_2024
            ]
        }
        self.imss = {
            2024: [
                ImssRate(concept=c, base=b, employer_rate=D(er), employee_rate=D(ee)) for c, b, er, ee in IMSS_2024
            ]
        }
        self.uma = {2024: D("108.57"), 2025: D("113.14")}
        self.isn = {("CMX", 2024): D("3.00"), ("JAL", 2024): D("2.00")}

    def get_isr_brackets(self, *, year: int, period: PayPeriod):
        return list(self.isr.get((year, period), []))

    def get_subsidy_brackets(self, *, year: int, period: PayPeriod):
        return list(self.subsidy.get((year, period), []))

    def get_imss_rates(self, *, year: int):
        return list(self.imss.get(year, []))

    def get_uma(self, *, year: int) -> Optional[Decimal]:
        return self.uma.get(year)

    def get_isn_rate(self, *, state_code: str, year: int) -> Optional[Decimal]:
        return self.isn.get((state_code, year))


@pytest.fixture()
def rates() -> InMemoryRates:
    return InMemoryRates()
