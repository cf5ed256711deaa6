from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from ..core.enums import AchievementLevel


@dataclass(frozen=True)
class GoalAchievement:
    percentage: Decimal
    level: AchievementLevel
    threshold_pct: Decimal
    stretch_pct: Decimal
    is_inverse: bool

    def to_dict(self) -> dict:
        return {
            "percentage": float(self.percentage),
            "level": self.level.value,
            "thresholdPercentage": float(self.threshold_pct),
            "stretchPercentage": float(self.stretch_pct),
            "isInverse": self.is_inverse,
        }


@dataclass(frozen=True)
class CycleValidation:
    """Outcome of checking an appraisal/feedback cycle's dates.

    errors maps a field name ("end_date", a deadline name) to a message.
    """

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": dict(self.errors)}


@dataclass(frozen=True)
class RatingScale:
    min_value: Decimal
    max_value: Decimal
