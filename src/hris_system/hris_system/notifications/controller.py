from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications/email", methods=["POST"], endpoint="send_email")
    @roles_required(Role.ADMIN, Role.HR_MANAGER)
    def send_email():
        data = json_body()
        receipt = container.notification_service.send_email(
            to=data.get("to") or [],
            subject=data.get("subject", ""),
            html=data.get("html", ""),
        )
        return jsonify(receipt.to_dict())
