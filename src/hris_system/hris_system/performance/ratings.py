from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

from ..common.money import to_decimal
from ..core.exceptions import ValidationError
from .model import RatingScale

ZERO = Decimal("0")


def convert_rating(value, source: RatingScale, target: RatingScale, *, places: int = 2) -> Decimal:
    """Map a rating linearly from one scale onto another (e.g. 1-5 onto 0-100)."""

    value = to_decimal(value, "rating")
    for scale in (source, target):
        if scale.max_value <= scale.min_value:
            raise ValidationError("Rating scale maximum must be greater than its minimum")
    if not source.min_value <= value <= source.max_value:
        raise ValidationError(f"Rating {value} is outside the scale {source.min_value}-{source.max_value}")

    ratio = (value - source.min_value) / (source.max_value - source.min_value)
    converted = target.min_value + ratio * (target.max_value - target.min_value)
    return converted.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def weighted_participant_score(scores: Iterable[Tuple[object, object]]) -> Decimal:
    """Combine scores an employee received in several positions, weighted per position.

    Weights need not add up to 100; the result is normalized by their sum.
    """

    total_weight = ZERO
    weighted = ZERO
    for score, weight in scores:
        score = to_decimal(score, "score")
        weight = to_decimal(weight, "weight")
        if weight <= 0:
            raise ValidationError("Position weights must be greater than zero")
        total_weight += weight
        weighted += score * weight

    if total_weight == 0:
        raise ValidationError("At least one weighted score is required")
    return (weighted / total_weight).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
