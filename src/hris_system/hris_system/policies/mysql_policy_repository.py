from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RuleSeverity, RuleType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_column
from .model import PolicyRule
from .repository import PolicyRuleRepository


class MySQLPolicyRuleRepository(PolicyRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rules(self, *, context: str, company_id: Optional[int]) -> Sequence[PolicyRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, company_id, context, rule_code, rule_type, name,
                       config, severity, message, is_active
                FROM policy_rules
                WHERE context=%s AND (company_id IS NULL OR company_id=%s)
                ORDER BY company_id IS NOT NULL, rule_id
                """,
                (context, company_id),
            )
            return [
                PolicyRule(
                    rule_id=int(r["rule_id"]),
                    company_id=r.get("company_id"),
                    context=r["context"],
                    rule_code=r["rule_code"],
                    rule_type=RuleType(r["rule_type"]),
                    name=r["name"],
                    config=load_json_column(r.get("config")),
                    severity=RuleSeverity(r["severity"]),
                    message=r.get("message"),
                    is_active=bool(r.get("is_active", True)),
                )
                for r in fetchall(cur)
            ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO policy_overrides(rule_id, company_id, user_id, context, justification, reference)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(rule_id), company_id, int(user_id), context, justification, reference),
            )
            return int(cur.lastrowid)
