from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from .model import CycleValidation


def validate_cycle_dates(
    start_date: date,
    end_date: date,
    deadlines: Optional[Mapping[str, Optional[date]]] = None,
) -> CycleValidation:
    """Check an appraisal or feedback cycle window and its phase deadlines.

    start_date must be strictly before end_date; each deadline present must fall
    within [start_date, end_date].
    """

    errors: dict[str, str] = {}
    if start_date >= end_date:
        errors["end_date"] = "End date must be after start date"

    for name, deadline in (deadlines or {}).items():
        if deadline is None:
            continue
        if deadline < start_date or deadline > end_date:
            errors[name] = f"{name} must fall between the cycle start and end dates"

    return CycleValidation(errors=errors)
