from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def _payload(data: dict) -> dict:
    payload = data.get("data") or {}
    if not isinstance(payload, dict):
        raise ValidationError("data must be an object")
    return payload


def register(app: Flask, container: Container) -> None:
    @app.route("/api/policies/evaluate", methods=["POST"], endpoint="evaluate_policies")
    @login_required
    def evaluate():
        data = json_body()
        result = container.policy_service.evaluate(
            context=data.get("context", ""),
            payload=_payload(data),
            company_id=session.get("company_id"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/policies/override", methods=["POST"], endpoint="override_policies")
    @login_required
    def override():
        data = json_body()
        result = container.policy_service.override_warnings(
            context=data.get("context", ""),
            payload=_payload(data),
            company_id=session.get("company_id"),
            user_id=int(session["user_id"]),
            justification=data.get("justification", ""),
            reference=data.get("reference"),
        )
        body = result.to_dict()
        body["overridden"] = len(result.warnings)
        return jsonify(body)
