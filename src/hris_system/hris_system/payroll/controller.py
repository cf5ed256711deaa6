from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_local_date, parse_optional_date
from ..common.web import json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def _required_date(data: dict, key: str):
    if not data.get(key):
        raise ValidationError(f"{key} is required")
    return parse_local_date(data[key])


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/mx/isr", methods=["POST"], endpoint="mx_isr")
    @login_required
    def mx_isr():
        data = json_body()
        result = payroll.calculate_isr(
            gross_income=data.get("gross_income"),
            period=data.get("period"),
            year=data.get("year"),
            exempt_income=data.get("exempt_income", 0),
            apply_subsidy=_flag(data.get("apply_subsidy", False)),
        )
        return jsonify(result.to_dict())

    @app.route("/api/payroll/mx/imss", methods=["POST"], endpoint="mx_imss")
    @login_required
    def mx_imss():
        data = json_body()
        result = payroll.calculate_imss(
            sbc=data.get("sbc"),
            year=data.get("year"),
            days=data.get("days"),
            period=data.get("period"),
            risk_class=data.get("risk_class"),
            risk_premium=data.get("risk_premium"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/payroll/mx/sdi", methods=["POST"], endpoint="mx_sdi")
    @login_required
    def mx_sdi():
        data = json_body()
        kwargs = {
            k: data[k]
            for k in ("years_of_service", "aguinaldo_days", "vacation_premium_rate", "variable_daily")
            if data.get(k) is not None
        }
        result = payroll.calculate_sdi(daily_salary=data.get("daily_salary"), year=data.get("year"), **kwargs)
        return jsonify(result.to_dict())

    @app.route("/api/payroll/mx/isn", methods=["POST"], endpoint="mx_isn")
    @login_required
    def mx_isn():
        data = json_body()
        result = payroll.calculate_isn(
            taxable_payroll=data.get("taxable_payroll"),
            state_code=data.get("state_code", ""),
            year=data.get("year"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/payroll/mx/calculate", methods=["POST"], endpoint="mx_payroll_calculate")
    @login_required
    def mx_payroll_calculate():
        data = json_body()
        result = payroll.calculate_payroll(
            gross_pay=data.get("gross_pay"),
            period=data.get("period"),
            year=data.get("year"),
            sbc=data.get("sbc"),
            exempt_income=data.get("exempt_income", 0),
            risk_class=data.get("risk_class"),
            apply_subsidy=_flag(data.get("apply_subsidy", False)),
        )
        body = result.to_dict()
        if data.get("employee_id"):
            body["employeeId"] = data["employee_id"]
        return jsonify(body)

    @app.route("/api/payroll/mx/benefits/<kind>", methods=["POST"], endpoint="mx_benefits")
    @login_required
    def mx_benefits(kind: str):
        data = json_body()
        if kind == "aguinaldo":
            result = payroll.calculate_aguinaldo(
                daily_salary=data.get("daily_salary"),
                year=data.get("year"),
                hire_date=_required_date(data, "hire_date"),
                termination_date=parse_optional_date(data.get("termination_date")),
                aguinaldo_days=data.get("aguinaldo_days", 15),
            )
        elif kind == "vacation":
            result = payroll.calculate_vacation(
                daily_salary=data.get("daily_salary"),
                year=data.get("year"),
                hire_date=_required_date(data, "hire_date"),
                as_of=parse_optional_date(data.get("as_of")),
            )
        elif kind == "ptu":
            result = payroll.calculate_ptu(
                pool=data.get("pool"),
                days_worked=data.get("days_worked"),
                total_company_days=data.get("total_company_days"),
                employee_annual_salary=data.get("employee_annual_salary"),
                total_company_salaries=data.get("total_company_salaries"),
            )
        elif kind == "finiquito":
            result = payroll.calculate_finiquito(
                daily_salary=data.get("daily_salary"),
                hire_date=_required_date(data, "hire_date"),
                termination_date=_required_date(data, "termination_date"),
                termination_type=data.get("termination_type", "voluntary"),
            )
        else:
            raise ValidationError(f"Unknown benefit calculation: {kind}")
        return jsonify(result.to_dict())
