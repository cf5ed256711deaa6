from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ImssBase, PayPeriod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import ImssRate, IsrBracket, SubsidyBracket
from .repository import PayrollRateRepository


class MySQLPayrollRateRepository(PayrollRateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_isr_brackets(self, *, year: int, period: PayPeriod) -> Sequence[IsrBracket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lower_limit, upper_limit, fixed_fee, rate
                FROM mx_isr_brackets
                WHERE fiscal_year=%s AND period=%s
                ORDER BY lower_limit
                """,
                (int(year), period.value),
            )
            return [
                IsrBracket(
                    lower_limit=as_decimal(r["lower_limit"]),
                    upper_limit=as_decimal(r.get("upper_limit")),
                    fixed_fee=as_decimal(r["fixed_fee"]),
                    rate=as_decimal(r["rate"]),
                )
                for r in fetchall(cur)
            ]

    def get_subsidy_brackets(self, *, year: int, period: PayPeriod) -> Sequence[SubsidyBracket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lower_limit, upper_limit, subsidy
                FROM mx_employment_subsidy
                WHERE fiscal_year=%s AND period=%s
                ORDER BY lower_limit
                """,
                (int(year), period.value),
            )
            return [
                SubsidyBracket(
                    lower_limit=as_decimal(r["lower_limit"]),
                    upper_limit=as_decimal(r.get("upper_limit")),
                    subsidy=as_decimal(r["subsidy"]),
                )
                for r in fetchall(cur)
            ]

    def get_imss_rates(self, *, year: int) -> Sequence[ImssRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT concept, base_type, employer_rate, employee_rate
                FROM mx_imss_rates
                WHERE fiscal_year=%s
                ORDER BY sort_order, concept
                """,
                (int(year),),
            )
            return [
                ImssRate(
                    concept=r["concept"],
                    base=ImssBase(r["base_type"]),
                    employer_rate=as_decimal(r["employer_rate"]),
                    employee_rate=as_decimal(r["employee_rate"]),
                )
                for r in fetchall(cur)
            ]

    def get_uma(self, *, year: int) -> Optional[Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT daily_value FROM mx_uma_values WHERE fiscal_year=%s", (int(year),))
            row = fetchone(cur)
            return as_decimal(row["daily_value"]) if row else None

    def get_isn_rate(self, *, state_code: str, year: int) -> Optional[Decimal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT rate FROM mx_isn_rates WHERE state_code=%s AND fiscal_year=%s",
                (state_code.upper(), int(year)),
            )
            row = fetchone(cur)
            return as_decimal(row["rate"]) if row else None
