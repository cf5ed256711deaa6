from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_decimal
from ..core.constants import DEFAULT_READINESS_TOLERANCE
from ..core.enums import ReadinessTrend
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ReadinessTrendResult:
    trend: ReadinessTrend
    latest: Decimal
    previous: Optional[Decimal]
    delta: Decimal

    def to_dict(self) -> dict:
        return {
            "trend": self.trend.value,
            "latest": float(self.latest),
            "previous": float(self.previous) if self.previous is not None else None,
            "delta": float(self.delta),
        }


def readiness_trend(scores: Sequence, *, tolerance=DEFAULT_READINESS_TOLERANCE) -> ReadinessTrendResult:
    """Trend of a successor's readiness, comparing the two most recent assessments.

    `scores` is ordered oldest first. Changes within `tolerance` points are stable.
    """

    values = [to_decimal(s, "score") for s in scores]
    if not values:
        raise ValidationError("At least one readiness score is required")
    tolerance = to_decimal(tolerance, "tolerance")

    latest = values[-1]
    if len(values) == 1:
        return ReadinessTrendResult(trend=ReadinessTrend.STABLE, latest=latest, previous=None, delta=Decimal("0"))

    previous = values[-2]
    delta = latest - previous
    if delta > tolerance:
        trend = ReadinessTrend.IMPROVING
    elif delta < -tolerance:
        trend = ReadinessTrend.DECLINING
    else:
        trend = ReadinessTrend.STABLE
    return ReadinessTrendResult(trend=trend, latest=latest, previous=previous, delta=delta)
