"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

from .enums import PayPeriod

# Days used to prorate per-period IMSS quotas and to derive a daily SBC.
PERIOD_DAYS = {
    PayPeriod.WEEKLY: 7,
    PayPeriod.BIWEEKLY: 15,
    PayPeriod.MONTHLY: 30,
}

SBC_CAP_UMAS = Decimal("25")
IMSS_EXCESS_THRESHOLD_UMAS = Decimal("3")

# Prima media by work-risk class (Ley del Seguro Social, art. 73), in percent.
RISK_CLASS_PREMIUMS = {
    "I": Decimal("0.54355"),
    "II": Decimal("1.13065"),
    "III": Decimal("2.59840"),
    "IV": Decimal("4.65325"),
    "V": Decimal("7.58875"),
}
DEFAULT_RISK_CLASS = "I"

# LFT art. 76 after the 2023 reform: (minimum years of service, vacation days).
VACATION_TABLE = (
    (1, 12),
    (2, 14),
    (3, 16),
    (4, 18),
    (5, 20),
    (6, 22),
    (11, 24),
    (16, 26),
    (21, 28),
    (26, 30),
    (31, 32),
)
MIN_VACATION_DAYS = 12

AGUINALDO_DAYS = 15
VACATION_PREMIUM_RATE = Decimal("0.25")
AGUINALDO_EXEMPT_UMAS = Decimal("30")
VACATION_PREMIUM_EXEMPT_UMAS = Decimal("15")
SENIORITY_PREMIUM_DAYS_PER_YEAR = 12
SENIORITY_PREMIUM_CAP_UMAS = Decimal("2")
SENIORITY_PREMIUM_MIN_YEARS = 15
CONSTITUTIONAL_INDEMNITY_DAYS = 90
INDEMNITY_DAYS_PER_YEAR = 20
DAYS_PER_YEAR = 365
# LISR art. 93 XIII: separation payments exempt up to 90 UMA per year of service;
# a final fraction above six months counts as a full year.
SEPARATION_EXEMPT_UMAS_PER_YEAR = Decimal("90")
HALF_YEAR_DAYS = 182

ACHIEVEMENT_CAP = Decimal("150")
DEFAULT_THRESHOLD_PCT = Decimal("80")
DEFAULT_STRETCH_PCT = Decimal("120")

DEFAULT_READINESS_TOLERANCE = Decimal("2")

# (minimum score, risk level) ordered ascending.
DEFAULT_BRADFORD_THRESHOLDS = (
    (0, "low"),
    (50, "medium"),
    (125, "high"),
    (400, "critical"),
)

DEFAULT_HTTP_TIMEOUT = 30
