from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import RuleSeverity, RuleType


@dataclass(frozen=True)
class PolicyRule:
    """A configured policy rule row.

    company_id None marks a global rule; a company rule with the same rule_code
    replaces it for that company.
    """

    rule_id: int
    company_id: Optional[int]
    context: str
    rule_code: str
    rule_type: RuleType
    name: str
    config: dict[str, Any] = field(default_factory=dict)
    severity: RuleSeverity = RuleSeverity.BLOCKING
    message: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class PolicyFinding:
    rule_id: int
    rule_code: str
    rule_type: RuleType
    severity: RuleSeverity
    message: str

    def to_dict(self) -> dict:
        return {
            "ruleId": self.rule_id,
            "ruleCode": self.rule_code,
            "ruleType": self.rule_type.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class PolicyEvaluation:
    context: str
    violations: list[PolicyFinding] = field(default_factory=list)
    warnings: list[PolicyFinding] = field(default_factory=list)
    rules_checked: int = 0

    @property
    def allowed(self) -> bool:
        return not self.violations

    @property
    def requires_justification(self) -> bool:
        return self.allowed and bool(self.warnings)

    def to_dict(self) -> dict:
        return {
            "context": self.context,
            "allowed": self.allowed,
            "requiresJustification": self.requires_justification,
            "rulesChecked": self.rules_checked,
            "violations": [v.to_dict() for v in self.violations],
            "warnings": [w.to_dict() for w in self.warnings],
        }
