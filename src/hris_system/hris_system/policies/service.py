from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import today_local
from ..common.validators import require_non_empty
from ..core.enums import RuleSeverity
from ..core.exceptions import ValidationError
from .model import PolicyEvaluation, PolicyFinding, PolicyRule
from .repository import PolicyRuleRepository
from .rules.factory import RuleCheckerFactory

logger = logging.getLogger(__name__)


def resolve_rules(rules: list[PolicyRule], company_id: Optional[int]) -> list[PolicyRule]:
    """Company rules replace global rules sharing their rule_code; inactive rules drop out."""

    by_code: dict[str, PolicyRule] = {}
    for rule in rules:
        if rule.company_id is None:
            by_code.setdefault(rule.rule_code, rule)
    for rule in rules:
        if rule.company_id is not None and rule.company_id == company_id:
            by_code[rule.rule_code] = rule
    return [r for r in by_code.values() if r.is_active]


class PolicyService:
    def __init__(self, rules: PolicyRuleRepository, *, checker_factory: Optional[RuleCheckerFactory] = None):
        self._rules = rules
        self._factory = checker_factory or RuleCheckerFactory()

    def evaluate(
        self,
        *,
        context: str,
        payload: Mapping[str, Any],
        company_id: Optional[int],
        today: Optional[date] = None,
    ) -> PolicyEvaluation:
        context = require_non_empty(context, "context")
        today = today or today_local()

        applicable = resolve_rules(list(self._rules.list_rules(context=context, company_id=company_id)), company_id)

        violations: list[PolicyFinding] = []
        warnings: list[PolicyFinding] = []
        for rule in applicable:
            message = self._factory.for_rule_type(rule.rule_type).check(rule, payload, today=today)
            if message is None:
                continue
            finding = PolicyFinding(
                rule_id=rule.rule_id,
                rule_code=rule.rule_code,
                rule_type=rule.rule_type,
                severity=rule.severity,
                message=rule.message or message,
            )
            if rule.severity == RuleSeverity.BLOCKING:
                violations.append(finding)
            else:
                warnings.append(finding)

        logger.info(
            "policy check %s company=%s: %d rules, %d violations, %d warnings",
            context,
            company_id,
            len(applicable),
            len(violations),
            len(warnings),
        )
        return PolicyEvaluation(context=context, violations=violations, warnings=warnings, rules_checked=len(applicable))

    def override_warnings(
        self,
        *,
        context: str,
        payload: Mapping[str, Any],
        company_id: Optional[int],
        user_id: int,
        justification: str,
        reference: Optional[str] = None,
        today: Optional[date] = None,
    ) -> PolicyEvaluation:
        """Accept the warnings of an evaluation with a written justification.

        Violations cannot be overridden. One override record is stored per warning.
        """

        justification = require_non_empty(justification, "justification")
        evaluation = self.evaluate(context=context, payload=payload, company_id=company_id, today=today)
        if not evaluation.allowed:
            raise ValidationError("Blocking policy violations cannot be overridden")

        for warning in evaluation.warnings:
            self._rules.record_override(
                rule_id=warning.rule_id,
                company_id=company_id,
                user_id=int(user_id),
                context=evaluation.context,
                justification=justification,
                reference=reference,
            )
        logger.info("user %s overrode %d policy warnings (%s)", user_id, len(evaluation.warnings), context)
        return evaluation
