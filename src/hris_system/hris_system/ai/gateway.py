"""Client for the OpenAI-compatible chat completions gateway used for text analysis."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import ConfigurationError, PaymentRequiredError, RateLimitError, UpstreamError

logger = logging.getLogger(__name__)


class AIGatewayClient:
    def __init__(self, base_url: str, api_key: Optional[str], model: str, *, timeout: int = DEFAULT_HTTP_TIMEOUT):
        self._base_url = (base_url or "").rstrip("/")
        self._api_key = api_key
        self._model = model
        self._timeout = timeout

    def is_configured(self) -> bool:
        return bool(self._base_url and self._api_key)

    def call_tool(self, *, system_prompt: str, user_prompt: str, tool: dict[str, Any]) -> dict[str, Any]:
        """Send a chat completion that forces `tool` and return its parsed arguments."""

        if not self.is_configured():
            raise ConfigurationError("AI gateway API key is not configured")

        name = tool["function"]["name"]
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "tools": [tool],
            "tool_choice": {"type": "function", "function": {"name": name}},
        }
        try:
            resp = requests.post(
                f"{self._base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("AI gateway unreachable: %s", e)
            raise UpstreamError("AI gateway is unreachable") from e

        if resp.status_code == 429:
            raise RateLimitError("Rate limit exceeded, please try again later")
        if resp.status_code == 402:
            raise PaymentRequiredError("AI credits exhausted, please add funds")
        if resp.status_code >= 300:
            logger.error("AI gateway error %s: %s", resp.status_code, resp.text[:500])
            raise UpstreamError(f"AI gateway error: {resp.status_code}", status_code=resp.status_code)

        return _tool_arguments(resp.json(), name)


def _tool_arguments(data: dict[str, Any], name: str) -> dict[str, Any]:
    try:
        calls = data["choices"][0]["message"].get("tool_calls") or []
    except (KeyError, IndexError, TypeError, AttributeError):
        calls = []
    for call in calls:
        fn = call.get("function") or {}
        if fn.get("name") != name:
            continue
        try:
            args = json.loads(fn.get("arguments") or "")
        except json.JSONDecodeError as e:
            raise UpstreamError("AI response carried malformed tool arguments") from e
        if isinstance(args, dict):
            return args
    raise UpstreamError("No tool call in AI response")
