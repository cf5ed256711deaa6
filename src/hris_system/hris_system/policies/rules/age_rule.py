from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ...common.datetime_utils import full_years_between
from ...common.money import to_decimal
from ..model import PolicyRule
from .base import RuleChecker, payload_date


class AgeRestrictionChecker(RuleChecker):
    """Age (from date_of_birth, or an explicit age) within config min_age/max_age."""

    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        min_age = rule.config.get("min_age")
        max_age = rule.config.get("max_age")

        birth = payload_date(payload, "date_of_birth")
        if birth is not None:
            as_of = payload_date(payload, "effective_date") or today
            age = full_years_between(birth, as_of)
        elif payload.get("age") is not None:
            age = int(to_decimal(payload["age"], "age"))
        else:
            return "Date of birth is required to verify the age restriction"

        if min_age is not None and age < int(min_age):
            return f"Minimum age is {int(min_age)} (current age {age})"
        if max_age is not None and age > int(max_age):
            return f"Maximum age is {int(max_age)} (current age {age})"
        return None
