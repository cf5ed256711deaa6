from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..model import PolicyRule
from .base import RuleChecker, normalized_set


class DocumentRequiredChecker(RuleChecker):
    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        required = [str(d) for d in rule.config.get("documents", [])]
        provided = normalized_set(payload.get("documents"), "documents")
        missing = [d for d in required if d.strip().lower() not in provided]
        if missing:
            return "Missing required documents: " + ", ".join(missing)
        return None
