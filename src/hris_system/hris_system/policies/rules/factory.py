from __future__ import annotations

from dataclasses import dataclass, field

from ...core.enums import RuleType
from .age_rule import AgeRestrictionChecker
from .approval_rule import ApprovalRequiredChecker
from .base import RuleChecker
from .document_rule import DocumentRequiredChecker
from .qualification_rule import QualificationRequiredChecker
from .time_limit_rule import TimeLimitChecker


@dataclass
class RuleCheckerFactory:
    """Factory Pattern: choose the checker for a rule type."""

    _checkers: dict = field(
        default_factory=lambda: {
            RuleType.AGE_RESTRICTION: AgeRestrictionChecker(),
            RuleType.DOCUMENT_REQUIRED: DocumentRequiredChecker(),
            RuleType.TIME_LIMIT: TimeLimitChecker(),
            RuleType.QUALIFICATION_REQUIRED: QualificationRequiredChecker(),
            RuleType.APPROVAL_REQUIRED: ApprovalRequiredChecker(),
        }
    )

    def for_rule_type(self, rule_type: RuleType) -> RuleChecker:
        return self._checkers[RuleType(rule_type)]
