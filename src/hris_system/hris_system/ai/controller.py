from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .service import calculate_enps, goal_from_mapping, responses_from_list


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ai/goal-quality", methods=["POST"], endpoint="ai_goal_quality")
    @login_required
    def goal_quality():
        data = json_body()
        goal = data.get("goal")
        if not isinstance(goal, dict):
            raise ValidationError("goal is required")
        return jsonify(container.text_analysis_service.analyze_goal_quality(goal_from_mapping(goal)))

    @app.route("/api/ai/sentiment", methods=["POST"], endpoint="ai_sentiment")
    @login_required
    def sentiment():
        data = json_body()
        analyses = container.text_analysis_service.analyze_sentiment(responses_from_list(data.get("responses")))
        return jsonify({"analyses": analyses})

    @app.route("/api/ai/enps", methods=["POST"], endpoint="ai_enps")
    @login_required
    def enps():
        scores = json_body().get("scores")
        if not isinstance(scores, list):
            raise ValidationError("scores must be a list")
        return jsonify(calculate_enps(scores).to_dict())
