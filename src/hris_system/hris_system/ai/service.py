from __future__ import annotations

import json
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

from ..common.validators import require_non_empty
from ..core.exceptions import UpstreamError, ValidationError
from .gateway import AIGatewayClient
from .model import EnpsResult, GoalDraft, SurveyResponse

logger = logging.getLogger(__name__)

SMART_KEYS = ("specific", "measurable", "achievable", "relevant", "time_bound")
QUALITY_SCORES = (
    "clarity_score",
    "specificity_score",
    "measurability_score",
    "achievability_score",
    "relevance_score",
    "overall_quality_score",
)
SENTIMENT_LABELS = ("very_negative", "negative", "neutral", "positive", "very_positive")
URGENCY_LEVELS = ("low", "normal", "high", "critical")
RISK_LEVELS = ("low", "medium", "high", "critical")

GOAL_QUALITY_PROMPT = """You are an expert in goal-setting best practices, OKRs and performance management.
Analyze the provided goal and return a quality assessment.
Score clarity, specificity, measurability, achievability and relevance from 0 to 100.
List up to 5 improvement suggestions, the risk factors that might affect completion,
and an overall quality score from 0 to 100."""

SENTIMENT_PROMPT = """You are an expert HR sentiment analyst specializing in employee feedback.
Analyze open-ended survey responses to determine sentiment, key themes and urgency.
Be objective and identify actionable insights."""

GOAL_QUALITY_TOOL = {
    "type": "function",
    "function": {
        "name": "analyze_goal_quality",
        "description": "Returns a structured quality analysis of a goal",
        "parameters": {
            "type": "object",
            "properties": {
                **{key: {"type": "integer", "minimum": 0, "maximum": 100} for key in QUALITY_SCORES},
                "reasoning": {"type": "string"},
                "improvement_suggestions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "area": {"type": "string"},
                            "suggestion": {"type": "string"},
                            "priority": {"type": "string", "enum": ["high", "medium", "low"]},
                        },
                        "required": ["area", "suggestion", "priority"],
                    },
                },
                "risk_factors": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "factor": {"type": "string"},
                            "severity": {"type": "string", "enum": list(RISK_LEVELS)},
                        },
                        "required": ["factor", "severity"],
                    },
                },
                "completion_risk_level": {"type": "string", "enum": list(RISK_LEVELS)},
            },
            "required": [*QUALITY_SCORES, "reasoning", "improvement_suggestions", "risk_factors", "completion_risk_level"],
        },
    },
}

SENTIMENT_TOOL = {
    "type": "function",
    "function": {
        "name": "submit_sentiment_analysis",
        "description": "Submit sentiment analysis results for survey responses",
        "parameters": {
            "type": "object",
            "properties": {
                "analyses": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "responseId": {"type": "string"},
                            "sentimentScore": {"type": "number", "minimum": -1, "maximum": 1},
                            "sentimentLabel": {"type": "string", "enum": list(SENTIMENT_LABELS)},
                            "confidence": {"type": "number", "minimum": 0, "maximum": 1},
                            "keyThemes": {"type": "array", "items": {"type": "string"}},
                            "urgencyLevel": {"type": "string", "enum": list(URGENCY_LEVELS)},
                            "requiresAttention": {"type": "boolean"},
                        },
                        "required": [
                            "responseId",
                            "sentimentScore",
                            "sentimentLabel",
                            "confidence",
                            "keyThemes",
                            "urgencyLevel",
                            "requiresAttention",
                        ],
                    },
                }
            },
            "required": ["analyses"],
        },
    },
}


def _clamp(value: Any, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise UpstreamError("AI response contained a non-numeric score")
    return max(low, min(high, number))


def goal_from_mapping(data: Mapping[str, Any]) -> GoalDraft:
    return GoalDraft(
        title=require_non_empty(data.get("title"), "title"),
        description=data.get("description"),
        target_value=data.get("target_value"),
        current_value=data.get("current_value"),
        unit_of_measure=data.get("unit_of_measure"),
        start_date=data.get("start_date"),
        due_date=data.get("due_date"),
        status=data.get("status"),
        smart_flags={key: data.get(key) for key in SMART_KEYS},
    )


def responses_from_list(items: Any) -> list[SurveyResponse]:
    if not isinstance(items, list) or not items:
        raise ValidationError("responses must be a non-empty list")
    responses = []
    for idx, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            raise ValidationError(f"responses[{idx}] must be an object")
        responses.append(
            SurveyResponse(
                response_id=str(item.get("id") or idx),
                question_text=str(item.get("question_text") or ""),
                response_text=require_non_empty(item.get("response_text"), f"responses[{idx}].response_text"),
            )
        )
    return responses


def calculate_enps(scores: Iterable[Any]) -> EnpsResult:
    """Employee NPS: promoters score 9-10, passives 7-8, the rest are detractors."""

    values = []
    for raw in scores:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            raise ValidationError("eNPS scores must be integers between 0 and 10")
        if not 0 <= value <= 10:
            raise ValidationError("eNPS scores must be integers between 0 and 10")
        values.append(value)

    if not values:
        return EnpsResult(score=0, promoters=0, passives=0, detractors=0, total=0)

    promoters = sum(1 for v in values if v >= 9)
    passives = sum(1 for v in values if 7 <= v <= 8)
    detractors = len(values) - promoters - passives
    ratio = Decimal(promoters - detractors) / Decimal(len(values)) * 100
    score = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return EnpsResult(score=score, promoters=promoters, passives=passives, detractors=detractors, total=len(values))


class TextAnalysisService:
    def __init__(self, gateway: AIGatewayClient):
        self._gateway = gateway

    def analyze_goal_quality(self, goal: GoalDraft) -> dict[str, Any]:
        logger.info("analyzing goal quality: %s", goal.title)
        smart = "\n".join(
            f"- {key.replace('_', ' ').capitalize()}: {'Not defined' if value is None else value}"
            for key, value in goal.smart_flags.items()
        )
        unit = goal.unit_of_measure or ""
        user_prompt = (
            f"Goal Title: {goal.title}\n"
            f"Description: {goal.description or 'Not provided'}\n"
            f"Target Value: {goal.target_value if goal.target_value is not None else 'Not set'} {unit}\n"
            f"Current Value: {goal.current_value if goal.current_value is not None else 'Not set'}\n"
            f"Start Date: {goal.start_date or 'Not set'}\n"
            f"Due Date: {goal.due_date or 'Not set'}\n"
            f"Status: {goal.status or 'Not set'}\n"
            f"SMART Criteria Already Set:\n{smart}\n"
        )
        args = self._gateway.call_tool(system_prompt=GOAL_QUALITY_PROMPT, user_prompt=user_prompt, tool=GOAL_QUALITY_TOOL)

        result = dict(args)
        for key in QUALITY_SCORES:
            if key in result:
                result[key] = int(_clamp(result[key], 0, 100))
        result["improvement_suggestions"] = list(result.get("improvement_suggestions") or [])[:5]
        result["risk_factors"] = list(result.get("risk_factors") or [])
        return result

    def analyze_sentiment(self, responses: list[SurveyResponse]) -> list[dict[str, Any]]:
        logger.info("analyzing sentiment for %d responses", len(responses))
        body = [
            {"id": r.response_id, "questionText": r.question_text, "responseText": r.response_text}
            for r in responses
        ]
        user_prompt = (
            "Analyze the following employee survey response(s) for sentiment:\n"
            f"{json.dumps(body, indent=2, ensure_ascii=False)}\n"
            "For each response return a sentiment score from -1 to 1, a label, a confidence from 0 to 1,"
            " key themes, an urgency level and whether it needs immediate HR attention."
        )
        args = self._gateway.call_tool(system_prompt=SENTIMENT_PROMPT, user_prompt=user_prompt, tool=SENTIMENT_TOOL)

        analyses = args.get("analyses")
        if not isinstance(analyses, list):
            raise UpstreamError("AI response did not include analyses")

        results = []
        for item in analyses:
            if not isinstance(item, Mapping):
                continue
            label = item.get("sentimentLabel")
            urgency = item.get("urgencyLevel")
            results.append(
                {
                    "responseId": str(item.get("responseId", "")),
                    "sentimentScore": _clamp(item.get("sentimentScore", 0), -1, 1),
                    "sentimentLabel": label if label in SENTIMENT_LABELS else "neutral",
                    "confidence": _clamp(item.get("confidence", 0), 0, 1),
                    "keyThemes": list(item.get("keyThemes") or []),
                    "urgencyLevel": urgency if urgency in URGENCY_LEVELS else "normal",
                    "requiresAttention": bool(item.get("requiresAttention", False)),
                }
            )
        return results
