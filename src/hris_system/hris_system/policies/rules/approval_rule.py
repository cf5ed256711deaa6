from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ...common.money import to_decimal
from ..model import PolicyRule
from .base import RuleChecker


class ApprovalRequiredChecker(RuleChecker):
    """Flags payloads whose config `field` is above `threshold`."""

    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        field = rule.config.get("field")
        threshold = rule.config.get("threshold")
        if not field or threshold is None or payload.get(field) is None:
            return None

        value = to_decimal(payload[field], field)
        if value > to_decimal(threshold, "threshold"):
            return f"{field} of {value} is above {threshold} and requires approval"
        return None
