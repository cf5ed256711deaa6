from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Mapping, Optional

from ...common.datetime_utils import parse_optional_date
from ...core.exceptions import ValidationError
from ..model import PolicyRule


def normalized_set(values: Any, field_name: str) -> set[str]:
    if values is None:
        return set()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple, set)):
        raise ValidationError(f"{field_name} must be a list")
    return {str(v).strip().lower() for v in values if str(v).strip()}


def payload_date(payload: Mapping[str, Any], key: str) -> Optional[date]:
    return parse_optional_date(payload.get(key))


class RuleChecker(ABC):
    """Strategy Pattern: one predicate per rule type.

    check() returns a message when the payload breaks the rule, None otherwise.
    """

    @abstractmethod
    def check(self, rule: PolicyRule, payload: Mapping[str, Any], *, today: date) -> Optional[str]:
        raise NotImplementedError
