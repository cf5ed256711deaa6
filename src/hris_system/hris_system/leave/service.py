from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_BRADFORD_THRESHOLDS
from ..core.enums import AbsenceTrend, RiskLevel
from ..core.exceptions import ValidationError
from .model import BradfordScore, BradfordThreshold
from .repository import BradfordThresholdRepository

DEFAULT_THRESHOLDS = tuple(BradfordThreshold(min_score=s, risk_level=RiskLevel(level)) for s, level in DEFAULT_BRADFORD_THRESHOLDS)


def _non_negative_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def bradford_score(spells: int, days: int) -> int:
    """Bradford factor: spells of absence squared times total days absent."""

    return spells * spells * days


def classify(score: int, thresholds: Sequence[BradfordThreshold]) -> BradfordThreshold:
    ordered = sorted(thresholds, key=lambda t: t.min_score)
    chosen = ordered[0]
    for threshold in ordered:
        if threshold.min_score <= score:
            chosen = threshold
    return chosen


class BradfordService:
    def __init__(self, thresholds: BradfordThresholdRepository):
        self._thresholds = thresholds

    def score(
        self,
        *,
        spells,
        days,
        company_id: Optional[int] = None,
        previous_score=None,
    ) -> BradfordScore:
        spells = _non_negative_int(spells, "spells")
        days = _non_negative_int(days, "days")
        if spells == 0 and days > 0:
            raise ValidationError("Absence days require at least one spell")
        if days < spells:
            raise ValidationError("Each spell spans at least one day")

        thresholds: Sequence[BradfordThreshold] = ()
        if company_id is not None:
            thresholds = self._thresholds.list_active(company_id=int(company_id))
        score = bradford_score(spells, days)
        band = classify(score, thresholds or DEFAULT_THRESHOLDS)

        previous = _non_negative_int(previous_score, "previous_score") if previous_score is not None else None
        trend = None
        if previous is not None:
            if score < previous:
                trend = AbsenceTrend.IMPROVING
            elif score > previous:
                trend = AbsenceTrend.WORSENING
            else:
                trend = AbsenceTrend.STABLE

        return BradfordScore(
            spells=spells,
            days=days,
            score=score,
            risk_level=band.risk_level,
            action_required=band.action_required,
            previous_score=previous,
            trend=trend,
        )
