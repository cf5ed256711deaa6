from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/import", methods=["POST"], endpoint="import_employees")
    @roles_required(Role.ADMIN, Role.HR_MANAGER)
    def import_employees():
        data = json_body()
        rows = data.get("rows")
        if not isinstance(rows, list):
            raise ValidationError("rows must be a list")
        result = container.import_service.import_rows(rows, send_invites=bool(data.get("send_invites", False)))
        return jsonify(result.to_dict())
