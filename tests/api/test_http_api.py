from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hris_system.hris_system.core.enums import Role, RuleSeverity, RuleType
from src.hris_system.hris_system.employees.import_service import EmployeeImportService
from src.hris_system.hris_system.employees.model import CompanyRef
from src.hris_system.hris_system.leave.service import BradfordService
from src.hris_system.hris_system.main import create_app
from src.hris_system.hris_system.payroll.service import MexicanPayrollService
from src.hris_system.hris_system.policies.model import PolicyRule
from src.hris_system.hris_system.policies.service import PolicyService
from src.hris_system.hris_system.users.model import User
from src.hris_system.hris_system.users.service import AuthService


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._by_email = {u.email: u for u in users}

    def get_by_email(self, email: str) -> Optional[User]:
        return self._by_email.get(email)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self._by_email.values() if u.user_id == user_id), None)


class NoThresholds:
    def list_active(self, *, company_id):
        return []


class OneRule:
    def __init__(self):
        self.overrides = []

    def list_rules(self, *, context, company_id):
        if context != "expense":
            return []
        return [
            PolicyRule(
                rule_id=5,
                company_id=None,
                context="expense",
                rule_code="EXPENSE_APPROVAL",
                rule_type=RuleType.APPROVAL_REQUIRED,
                name="Expense approval",
                config={"field": "amount", "threshold": 10000},
                severity=RuleSeverity.WARNING,
            )
        ]

    def record_override(self, **kwargs):
        self.overrides.append(kwargs)
        return 1


class OneCompany:
    def __init__(self):
        self.created = []

    def list_companies(self):
        return [CompanyRef(company_id=1, code="DEMO")]

    def list_departments(self):
        return []

    def list_existing_emails(self):
        return set()

    def create_employee(self, employee):
        self.created.append(employee)
        return len(self.created)


def _user(user_id, email, role):
    return User(
        user_id=user_id,
        full_name=email.split("@")[0],
        email=email,
        password_hash=generate_password_hash("secret"),
        role=role,
        company_id=1,
    )


@pytest.fixture()
def container(rates):
    users = InMemoryUsers([_user(1, "admin@demo.mx", Role.ADMIN), _user(2, "emp@demo.mx", Role.EMPLOYEE)])
    return SimpleNamespace(
        auth_service=AuthService(users),
        payroll_service=MexicanPayrollService(rates),
        bradford_service=BradfordService(NoThresholds()),
        policy_service=PolicyService(OneRule()),
        text_analysis_service=None,
        notification_service=None,
        import_service=EmployeeImportService(OneCompany()),
    )


@pytest.fixture()
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def _login(client, email="admin@demo.mx"):
    resp = client.post("/api/auth/login", json={"email": email, "password": "secret"})
    assert resp.status_code == 200
    return resp


def test_health_and_cors_headers(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_preflight_returns_no_content(client):
    resp = client.open("/api/payroll/mx/isr", method="OPTIONS")

    assert resp.status_code == 204
    assert "content-type" in resp.headers["Access-Control-Allow-Headers"]


def test_login_rejects_bad_password(client):
    resp = client.post("/api/auth/login", json={"email": "admin@demo.mx", "password": "nope"})

    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_session_user(client):
    _login(client)

    me = client.get("/api/auth/me").get_json()
    assert me["role"] == "admin"
    assert me["company_id"] == 1

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_calculators_require_login(client):
    resp = client.post("/api/payroll/mx/isr", json={"gross_income": 10000, "period": "monthly", "year": 2024})

    assert resp.status_code == 401


def test_isr_endpoint(client):
    _login(client)

    resp = client.post("/api/payroll/mx/isr", json={"gross_income": 10000, "period": "monthly", "year": 2024})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["netTax"] == 770.9
    assert body["bracket"]["lowerLimit"] == 6332.06


def test_payroll_endpoint_echoes_employee(client):
    _login(client)

    resp = client.post(
        "/api/payroll/mx/calculate",
        json={"employee_id": "E-1", "gross_pay": 10000, "period": "monthly", "year": 2024},
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["employeeId"] == "E-1"
    assert body["netPay"] == round(body["grossPay"] - body["totalDeductions"], 2)


def test_validation_errors_are_400(client):
    _login(client)

    resp = client.post("/api/payroll/mx/isr", json={"gross_income": -5, "period": "monthly", "year": 2024})

    assert resp.status_code == 400
    assert "gross_income" in resp.get_json()["error"]


def test_missing_rate_tables_are_500(client):
    _login(client)

    resp = client.post("/api/payroll/mx/isr", json={"gross_income": 10000, "period": "monthly", "year": 2019})

    assert resp.status_code == 500
    assert "ISR" in resp.get_json()["error"]


def test_benefit_endpoint(client):
    _login(client)

    resp = client.post(
        "/api/payroll/mx/benefits/finiquito",
        json={"daily_salary": 300, "hire_date": "2020-03-15", "termination_date": "2024-06-10"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["total"] == 6805.48


def test_performance_and_leave_endpoints(client):
    _login(client, "emp@demo.mx")

    goal = client.post("/api/performance/goal-achievement", json={"current_value": 120, "target_value": 100})
    cycle = client.post(
        "/api/performance/cycles/validate", json={"start_date": "2024-01-01", "end_date": "2023-12-31"}
    )
    trend = client.post("/api/succession/readiness-trend", json={"scores": [60, 70]})
    bradford = client.post("/api/leave/bradford", json={"spells": 3, "days": 10})

    assert goal.get_json()["level"] == "exceeds"
    assert cycle.get_json()["errors"].keys() == {"end_date"}
    assert trend.get_json()["trend"] == "improving"
    assert bradford.get_json()["riskLevel"] == "medium"


def test_policy_override_flow(client, container):
    _login(client)
    body = {"context": "expense", "data": {"amount": 15000}}

    evaluation = client.post("/api/policies/evaluate", json=body).get_json()
    override = client.post("/api/policies/override", json={**body, "justification": "Client visit"})

    assert evaluation["allowed"] is True
    assert evaluation["requiresJustification"] is True
    assert override.status_code == 200
    assert override.get_json()["overridden"] == 1
    assert container.policy_service._rules.overrides[0]["user_id"] == 1


def test_import_is_limited_to_hr_roles(client):
    _login(client, "emp@demo.mx")

    resp = client.post("/api/employees/import", json={"rows": []})

    assert resp.status_code == 403


def test_import_endpoint(client):
    _login(client)

    resp = client.post(
        "/api/employees/import",
        json={"rows": [{"email": "new@demo.mx", "full_name": "New Hire", "company_code": "DEMO"}]},
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"created": 1, "skipped": 0, "invited": 0, "errors": []}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()
