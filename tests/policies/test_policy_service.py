from __future__ import annotations

from datetime import date

import pytest

from src.hris_system.hris_system.core.enums import RuleSeverity, RuleType
from src.hris_system.hris_system.core.exceptions import ValidationError
from src.hris_system.hris_system.policies.model import PolicyRule
from src.hris_system.hris_system.policies.service import PolicyService

TODAY = date(2024, 6, 1)


class FakePolicyRepo:
    def __init__(self, rules: list[PolicyRule]):
        self.rules = rules
        self.overrides: list[dict] = []

    def list_rules(self, *, context, company_id):
        return [
            r for r in self.rules if r.context == context and (r.company_id is None or r.company_id == company_id)
        ]

    def record_override(self, **kwargs):
        self.overrides.append(kwargs)
        return len(self.overrides)


def _rule(rule_id, code, rule_type, config, *, context="leave_request", company_id=None, severity=RuleSeverity.BLOCKING, **kw):
    return PolicyRule(
        rule_id=rule_id,
        company_id=company_id,
        context=context,
        rule_code=code,
        rule_type=rule_type,
        name=code,
        config=config,
        severity=severity,
        **kw,
    )


@pytest.fixture()
def repo():
    return FakePolicyRepo(
        [
            _rule(1, "LEAVE_MAX_DAYS", RuleType.TIME_LIMIT, {"max_days": 30}),
            _rule(2, "LEAVE_MAX_DAYS", RuleType.TIME_LIMIT, {"max_days": 20}, company_id=1),
            _rule(
                3,
                "LEAVE_NOTICE",
                RuleType.TIME_LIMIT,
                {"min_notice_days": 7},
                severity=RuleSeverity.WARNING,
                message="Short notice",
            ),
            _rule(4, "LEAVE_NOTICE", RuleType.TIME_LIMIT, {"min_notice_days": 7}, company_id=2, is_active=False),
        ]
    )


LONG_LEAVE = {"start_date": "2024-07-01", "end_date": "2024-07-25", "request_date": "2024-06-01"}
SHORT_NOTICE = {"start_date": "2024-06-03", "end_date": "2024-06-05", "request_date": "2024-06-01"}


def test_company_rule_replaces_global_rule(repo):
    service = PolicyService(repo)

    company = service.evaluate(context="leave_request", payload=LONG_LEAVE, company_id=1, today=TODAY)
    other = service.evaluate(context="leave_request", payload=LONG_LEAVE, company_id=3, today=TODAY)

    assert not company.allowed
    assert [v.rule_id for v in company.violations] == [2]
    assert other.allowed
    assert company.rules_checked == 2


def test_inactive_company_rule_disables_global_rule(repo):
    service = PolicyService(repo)

    result = service.evaluate(context="leave_request", payload=SHORT_NOTICE, company_id=2, today=TODAY)

    assert result.allowed
    assert result.warnings == []
    assert result.rules_checked == 1


def test_warnings_require_justification_and_use_rule_message(repo):
    result = PolicyService(repo).evaluate(context="leave_request", payload=SHORT_NOTICE, company_id=None, today=TODAY)

    assert result.allowed
    assert result.requires_justification
    assert [w.message for w in result.warnings] == ["Short notice"]
    assert result.to_dict()["requiresJustification"] is True


def test_override_records_each_warning(repo):
    service = PolicyService(repo)

    result = service.override_warnings(
        context="leave_request",
        payload=SHORT_NOTICE,
        company_id=None,
        user_id=9,
        justification="Family emergency",
        reference="LR-12",
        today=TODAY,
    )

    assert len(result.warnings) == 1
    assert repo.overrides == [
        {
            "rule_id": 3,
            "company_id": None,
            "user_id": 9,
            "context": "leave_request",
            "justification": "Family emergency",
            "reference": "LR-12",
        }
    ]


def test_override_needs_justification(repo):
    with pytest.raises(ValidationError):
        PolicyService(repo).override_warnings(
            context="leave_request", payload=SHORT_NOTICE, company_id=None, user_id=9, justification="  ", today=TODAY
        )
    assert repo.overrides == []


def test_violations_cannot_be_overridden(repo):
    payload = {**LONG_LEAVE, "request_date": "2024-06-28"}
    with pytest.raises(ValidationError):
        PolicyService(repo).override_warnings(
            context="leave_request", payload=payload, company_id=1, user_id=9, justification="Manager OK", today=TODAY
        )
    assert repo.overrides == []


def test_context_is_required(repo):
    with pytest.raises(ValidationError):
        PolicyService(repo).evaluate(context="", payload={}, company_id=None)
