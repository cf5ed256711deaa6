from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_local_date, parse_optional_date
from ..common.money import to_decimal
from ..common.web import json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .cycles import validate_cycle_dates
from .goals import calculate_goal_achievement
from .model import RatingScale
from .ratings import convert_rating, weighted_participant_score


def _scale(data: dict, key: str) -> RatingScale:
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise ValidationError(f"{key} must be an object with min and max")
    return RatingScale(
        min_value=to_decimal(raw.get("min"), f"{key}.min"),
        max_value=to_decimal(raw.get("max"), f"{key}.max"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/performance/goal-achievement", methods=["POST"], endpoint="goal_achievement")
    @login_required
    def goal_achievement():
        data = json_body()
        result = calculate_goal_achievement(
            data.get("current_value"),
            data.get("target_value"),
            threshold_pct=data.get("threshold_percentage"),
            stretch_pct=data.get("stretch_percentage"),
            is_inverse=bool(data.get("is_inverse", False)),
        )
        return jsonify(result.to_dict())

    @app.route("/api/performance/cycles/validate", methods=["POST"], endpoint="validate_cycle")
    @login_required
    def validate_cycle():
        data = json_body()
        if not data.get("start_date") or not data.get("end_date"):
            raise ValidationError("start_date and end_date are required")
        deadlines = data.get("deadlines") or {}
        if not isinstance(deadlines, dict):
            raise ValidationError("deadlines must be an object of name -> YYYY-MM-DD")
        result = validate_cycle_dates(
            parse_local_date(data["start_date"]),
            parse_local_date(data["end_date"]),
            {name: parse_optional_date(value) for name, value in deadlines.items()},
        )
        return jsonify(result.to_dict())

    @app.route("/api/performance/ratings/convert", methods=["POST"], endpoint="convert_rating")
    @login_required
    def convert():
        data = json_body()
        converted = convert_rating(data.get("value"), _scale(data, "from_scale"), _scale(data, "to_scale"))
        return jsonify({"value": float(converted)})

    @app.route("/api/performance/ratings/weighted", methods=["POST"], endpoint="weighted_rating")
    @login_required
    def weighted():
        data = json_body()
        participants = data.get("positions") or []
        score = weighted_participant_score((p.get("score"), p.get("weight")) for p in participants)
        return jsonify({"score": float(score)})
