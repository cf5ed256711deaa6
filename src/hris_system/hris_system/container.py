from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ai.gateway import AIGatewayClient
from .ai.service import TextAnalysisService
from .core.constants import DEFAULT_HTTP_TIMEOUT
from .database.connection import DBConfig, DatabaseConnection
from .employees.import_service import EmployeeImportService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leave.mysql_threshold_repository import MySQLBradfordThresholdRepository
from .leave.service import BradfordService
from .notifications.email_client import EmailClient
from .notifications.service import NotificationService
from .payroll.mysql_rate_repository import MySQLPayrollRateRepository
from .payroll.service import MexicanPayrollService
from .policies.mysql_policy_repository import MySQLPolicyRuleRepository
from .policies.rules.factory import RuleCheckerFactory
from .policies.service import PolicyService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    rates_repo: MySQLPayrollRateRepository
    thresholds_repo: MySQLBradfordThresholdRepository
    policies_repo: MySQLPolicyRuleRepository
    employees_repo: MySQLEmployeeRepository

    auth_service: AuthService
    payroll_service: MexicanPayrollService
    bradford_service: BradfordService
    policy_service: PolicyService
    text_analysis_service: TextAnalysisService
    notification_service: NotificationService
    import_service: EmployeeImportService


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    timeout = int(getattr(settings, "HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT))

    users_repo = MySQLUserRepository(conn)
    rates_repo = MySQLPayrollRateRepository(conn)
    thresholds_repo = MySQLBradfordThresholdRepository(conn)
    policies_repo = MySQLPolicyRuleRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)

    gateway = AIGatewayClient(
        getattr(settings, "AI_GATEWAY_URL", ""),
        getattr(settings, "AI_API_KEY", None),
        getattr(settings, "AI_MODEL", ""),
        timeout=timeout,
    )
    email_client = EmailClient(
        getattr(settings, "EMAIL_API_URL", ""),
        getattr(settings, "EMAIL_API_KEY", None),
        getattr(settings, "EMAIL_FROM", ""),
        timeout=timeout,
    )
    notification_service = NotificationService(email_client)

    return Container(
        conn=conn,
        users_repo=users_repo,
        rates_repo=rates_repo,
        thresholds_repo=thresholds_repo,
        policies_repo=policies_repo,
        employees_repo=employees_repo,
        auth_service=AuthService(users_repo),
        payroll_service=MexicanPayrollService(rates_repo),
        bradford_service=BradfordService(thresholds_repo),
        policy_service=PolicyService(policies_repo, checker_factory=RuleCheckerFactory()),
        text_analysis_service=TextAnalysisService(gateway),
        notification_service=notification_service,
        import_service=EmployeeImportService(employees_repo, notification_service),
    )
