from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AbsenceTrend, RiskLevel


@dataclass(frozen=True)
class BradfordThreshold:
    min_score: int
    risk_level: RiskLevel
    action_required: Optional[str] = None


@dataclass(frozen=True)
class BradfordScore:
    spells: int
    days: int
    score: int
    risk_level: RiskLevel
    action_required: Optional[str]
    previous_score: Optional[int]
    trend: Optional[AbsenceTrend]

    def to_dict(self) -> dict:
        return {
            "spells": self.spells,
            "days": self.days,
            "score": self.score,
            "riskLevel": self.risk_level.value,
            "actionRequired": self.action_required,
            "previousScore": self.previous_score,
            "trend": self.trend.value if self.trend else None,
        }
