from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    HR_MANAGER = "hr_manager"
    EMPLOYEE = "employee"


class PayPeriod(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class AchievementLevel(str, Enum):
    """Qualitative band of a goal's achievement percentage."""

    NOT_STARTED = "not_started"
    BELOW = "below"
    MEETS = "meets"
    EXCEEDS = "exceeds"


class RuleType(str, Enum):
    AGE_RESTRICTION = "age_restriction"
    DOCUMENT_REQUIRED = "document_required"
    TIME_LIMIT = "time_limit"
    QUALIFICATION_REQUIRED = "qualification_required"
    APPROVAL_REQUIRED = "approval_required"


class RuleSeverity(str, Enum):
    """BLOCKING findings are violations; WARNING findings can be overridden."""

    BLOCKING = "blocking"
    WARNING = "warning"


class ImssBase(str, Enum):
    """What an IMSS rate row is applied to."""

    SBC = "sbc"
    UMA_FIXED = "uma_fixed"
    EXCESS_3UMA = "excess_3uma"
    RISK = "risk"


class TerminationType(str, Enum):
    VOLUNTARY = "voluntary"
    JUSTIFIED = "justified"
    UNJUSTIFIED = "unjustified"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ReadinessTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class AbsenceTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"
