from __future__ import annotations

import re
from decimal import Decimal

from ..core.exceptions import ValidationError
from .money import to_decimal

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive(value, field_name: str) -> Decimal:
    number = to_decimal(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def require_non_negative(value, field_name: str) -> Decimal:
    number = to_decimal(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_email(value: str, field_name: str = "email") -> str:
    email = require_non_empty(value, field_name).lower()
    if not _EMAIL.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email
