from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..core.exceptions import ValidationError

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value, field_name: str = "value") -> Decimal:
    """Convert JSON numbers/strings to Decimal without float artifacts."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(base: Decimal, rate_pct: Decimal) -> Decimal:
    return base * rate_pct / HUNDRED


def effective_rate(amount: Decimal, base: Decimal) -> Decimal:
    if base <= 0:
        return Decimal("0.00")
    return round_money(amount / base * HUNDRED)


def as_float(value: Decimal | None) -> float | None:
    """JSON view of a money amount: two decimals."""
    if value is None:
        return None
    return float(round_money(value))
