from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave/bradford", methods=["POST"], endpoint="bradford_score")
    @login_required
    def bradford():
        data = json_body()
        result = container.bradford_service.score(
            spells=data.get("spells"),
            days=data.get("days"),
            company_id=session.get("company_id"),
            previous_score=data.get("previous_score"),
        )
        return jsonify(result.to_dict())
