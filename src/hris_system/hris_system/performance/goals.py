from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..common.money import HUNDRED, to_decimal
from ..core.constants import ACHIEVEMENT_CAP, DEFAULT_STRETCH_PCT, DEFAULT_THRESHOLD_PCT
from ..core.enums import AchievementLevel
from ..core.exceptions import ValidationError
from .model import GoalAchievement

ZERO = Decimal("0")
PCT_PLACES = Decimal("0.01")


def calculate_goal_achievement(
    current,
    target,
    *,
    threshold_pct=DEFAULT_THRESHOLD_PCT,
    stretch_pct=DEFAULT_STRETCH_PCT,
    is_inverse: bool = False,
) -> GoalAchievement:
    """Score a goal's progress as a percentage of target and a qualitative band.

    Inverse goals (lower is better) score target/current. The percentage is capped to
    [0, 150]; below `threshold_pct` is "below", from threshold up to `stretch_pct` is
    "meets", at or above stretch is "exceeds". A regular goal with no progress is
    "not_started".
    """

    current = to_decimal(current, "current_value")
    target = to_decimal(target, "target_value")
    threshold = to_decimal(DEFAULT_THRESHOLD_PCT if threshold_pct is None else threshold_pct, "threshold_percentage")
    stretch = to_decimal(DEFAULT_STRETCH_PCT if stretch_pct is None else stretch_pct, "stretch_percentage")

    if target <= 0:
        raise ValidationError("target_value must be greater than zero")
    if not ZERO < threshold <= HUNDRED:
        raise ValidationError("threshold_percentage must be within (0, 100]")
    if stretch <= HUNDRED:
        raise ValidationError("stretch_percentage must be greater than 100")

    if is_inverse:
        raw = ACHIEVEMENT_CAP if current <= 0 else target / current * HUNDRED
    else:
        raw = current / target * HUNDRED

    # Bands are decided on the unrounded value.
    bounded = min(max(raw, ZERO), ACHIEVEMENT_CAP)
    percentage = bounded.quantize(PCT_PLACES, rounding=ROUND_HALF_UP)
    if not is_inverse and current <= 0:
        level = AchievementLevel.NOT_STARTED
    elif bounded < threshold:
        level = AchievementLevel.BELOW
    elif bounded < stretch:
        level = AchievementLevel.MEETS
    else:
        level = AchievementLevel.EXCEEDS

    return GoalAchievement(
        percentage=percentage,
        level=level,
        threshold_pct=threshold,
        stretch_pct=stretch,
        is_inverse=bool(is_inverse),
    )
