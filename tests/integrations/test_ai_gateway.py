from __future__ import annotations

import json

import pytest
import requests

from src.hris_system.hris_system.ai import gateway as gateway_module
from src.hris_system.hris_system.ai.gateway import AIGatewayClient
from src.hris_system.hris_system.ai.service import (
    GOAL_QUALITY_TOOL,
    TextAnalysisService,
    calculate_enps,
    goal_from_mapping,
    responses_from_list,
)
from src.hris_system.hris_system.core.exceptions import (
    ConfigurationError,
    PaymentRequiredError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


def _tool_reply(name, arguments):
    return {
        "choices": [
            {"message": {"tool_calls": [{"function": {"name": name, "arguments": json.dumps(arguments)}}]}}
        ]
    }


@pytest.fixture()
def calls(monkeypatch):
    recorded = []

    def install(response):
        def fake_post(url, **kwargs):
            recorded.append({"url": url, **kwargs})
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr(gateway_module.requests, "post", fake_post)
        return recorded

    return install


def _client(key="secret"):
    return AIGatewayClient("https://ai.example/v1/", key, "test-model", timeout=5)


def test_forced_tool_call_is_sent_and_parsed(calls):
    recorded = calls(FakeResponse(payload=_tool_reply("analyze_goal_quality", {"overall_quality_score": 70})))

    args = _client().call_tool(system_prompt="sys", user_prompt="user", tool=GOAL_QUALITY_TOOL)

    assert args == {"overall_quality_score": 70}
    sent = recorded[0]
    assert sent["url"] == "https://ai.example/v1/chat/completions"
    assert sent["headers"]["Authorization"] == "Bearer secret"
    assert sent["timeout"] == 5
    assert sent["json"]["tool_choice"] == {"type": "function", "function": {"name": "analyze_goal_quality"}}
    assert sent["json"]["model"] == "test-model"


@pytest.mark.parametrize(
    "status,error",
    [(429, RateLimitError), (402, PaymentRequiredError), (500, UpstreamError), (401, UpstreamError)],
)
def test_error_statuses_are_mapped(calls, status, error):
    calls(FakeResponse(status_code=status, text="nope"))

    with pytest.raises(error) as exc:
        _client().call_tool(system_prompt="s", user_prompt="u", tool=GOAL_QUALITY_TOOL)
    assert exc.value.status_code == status


def test_network_failure_is_upstream_error(calls):
    calls(requests.ConnectionError("down"))

    with pytest.raises(UpstreamError):
        _client().call_tool(system_prompt="s", user_prompt="u", tool=GOAL_QUALITY_TOOL)


def test_missing_tool_call_is_upstream_error(calls):
    calls(FakeResponse(payload={"choices": [{"message": {"content": "hello"}}]}))

    with pytest.raises(UpstreamError):
        _client().call_tool(system_prompt="s", user_prompt="u", tool=GOAL_QUALITY_TOOL)


def test_missing_api_key_is_configuration_error(calls):
    recorded = calls(FakeResponse())

    with pytest.raises(ConfigurationError):
        _client(key=None).call_tool(system_prompt="s", user_prompt="u", tool=GOAL_QUALITY_TOOL)
    assert recorded == []


def test_goal_quality_scores_are_clamped(calls):
    reply = {
        "clarity_score": 130,
        "overall_quality_score": "65",
        "improvement_suggestions": [{"area": str(i), "suggestion": "s", "priority": "low"} for i in range(8)],
        "risk_factors": [],
    }
    recorded = calls(FakeResponse(payload=_tool_reply("analyze_goal_quality", reply)))
    service = TextAnalysisService(_client())

    result = service.analyze_goal_quality(goal_from_mapping({"title": "Reduce churn", "target_value": 5}))

    assert result["clarity_score"] == 100
    assert result["overall_quality_score"] == 65
    assert len(result["improvement_suggestions"]) == 5
    assert "Goal Title: Reduce churn" in recorded[0]["json"]["messages"][1]["content"]


def test_sentiment_results_are_normalized(calls):
    reply = {
        "analyses": [
            {
                "responseId": "r1",
                "sentimentScore": -3,
                "sentimentLabel": "furious",
                "confidence": 0.9,
                "keyThemes": ["workload"],
                "urgencyLevel": "high",
                "requiresAttention": True,
            }
        ]
    }
    calls(FakeResponse(payload=_tool_reply("submit_sentiment_analysis", reply)))
    service = TextAnalysisService(_client())

    [analysis] = service.analyze_sentiment(
        responses_from_list([{"id": "r1", "question_text": "How are you?", "response_text": "Overworked"}])
    )

    assert analysis["sentimentScore"] == -1.0
    assert analysis["sentimentLabel"] == "neutral"
    assert analysis["urgencyLevel"] == "high"
    assert analysis["requiresAttention"] is True


def test_sentiment_input_validation():
    with pytest.raises(ValidationError):
        responses_from_list([])
    with pytest.raises(ValidationError):
        responses_from_list([{"id": "r1", "response_text": ""}])
    with pytest.raises(ValidationError):
        goal_from_mapping({"description": "no title"})


def test_enps():
    result = calculate_enps([10, 9, 8, 7, 6, 0])
    assert (result.promoters, result.passives, result.detractors, result.score) == (2, 2, 2, 0)

    assert calculate_enps([10, 10, 9, 3]).score == 50
    assert calculate_enps([]).to_dict()["total"] == 0
    with pytest.raises(ValidationError):
        calculate_enps([11])
