from __future__ import annotations

import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_local_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string into a calendar date (no timezone shift)."""
    if not isinstance(value, str) or not _ISO_DATE.match(value.strip()):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_date_string(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_optional_date(value) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return parse_local_date(value)


def full_years_between(start: date, end: date) -> int:
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return max(years, 0)


def last_anniversary(start: date, on: date) -> date:
    """Most recent anniversary of `start` on or before `on` (Feb 29 falls back to Feb 28)."""
    year = start.year + full_years_between(start, on)
    try:
        return start.replace(year=year)
    except ValueError:
        return date(year, 2, 28)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
