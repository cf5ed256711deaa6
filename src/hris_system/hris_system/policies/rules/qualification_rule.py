from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..model import PolicyRule
from .base import RuleChecker, normalized_set


class QualificationRequiredChecker(RuleChecker):
    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        required = [str(q) for q in rule.config.get("qualifications", [])]
        held = normalized_set(payload.get("qualifications"), "qualifications")
        missing = [q for q in required if q.strip().lower() not in held]
        if missing:
            return "Missing required qualifications: " + ", ".join(missing)
        return None
