from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class GoalDraft:
    title: str
    description: Optional[str] = None
    target_value: Any = None
    current_value: Any = None
    unit_of_measure: Optional[str] = None
    start_date: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = None
    smart_flags: dict[str, Optional[bool]] = field(default_factory=dict)


@dataclass(frozen=True)
class SurveyResponse:
    response_id: str
    question_text: str
    response_text: str


@dataclass(frozen=True)
class EnpsResult:
    score: int
    promoters: int
    passives: int
    detractors: int
    total: int

    def to_dict(self) -> dict:
        return {
            "enpsScore": self.score,
            "promoters": self.promoters,
            "passives": self.passives,
            "detractors": self.detractors,
            "total": self.total,
        }
