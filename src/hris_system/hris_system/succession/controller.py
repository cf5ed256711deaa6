from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_READINESS_TOLERANCE
from ..core.exceptions import ValidationError
from .readiness import readiness_trend


def register(app: Flask, container: Container) -> None:
    @app.route("/api/succession/readiness-trend", methods=["POST"], endpoint="readiness_trend")
    @login_required
    def trend():
        data = json_body()
        scores = data.get("scores")
        if not isinstance(scores, list):
            raise ValidationError("scores must be a list ordered oldest first")
        result = readiness_trend(scores, tolerance=data.get("tolerance", DEFAULT_READINESS_TOLERANCE))
        return jsonify(result.to_dict())
