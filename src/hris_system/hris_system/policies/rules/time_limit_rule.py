from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..model import PolicyRule
from .base import RuleChecker, payload_date


class TimeLimitChecker(RuleChecker):
    """Duration cap (max_days, inclusive of both ends) and advance notice (min_notice_days)."""

    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        start = payload_date(payload, "start_date")
        end = payload_date(payload, "end_date") or start
        if start is None:
            return "start_date is required to verify the time limit"

        max_days = rule.config.get("max_days")
        if max_days is not None:
            duration = (end - start).days + 1
            if duration > int(max_days):
                return f"Duration of {duration} days exceeds the limit of {int(max_days)} days"

        min_notice = rule.config.get("min_notice_days")
        if min_notice is not None:
            requested = payload_date(payload, "request_date") or today
            notice = (start - requested).days
            if notice < int(min_notice):
                return f"At least {int(min_notice)} days of notice are required ({notice} given)"
        return None
