from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PolicyRule


class PolicyRuleRepository(Protocol):
    def list_rules(self, *, context: str, company_id: Optional[int]) -> Sequence[PolicyRule]:
        """Global rules plus the company's own rules for a context (active or not)."""

        raise NotImplementedError

    def record_override(
        self,
        *,
        rule_id: int,
        company_id: Optional[int],
        user_id: int,
        context: str,
        justification: str,
        reference: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
