from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..core.exceptions import ConfigurationError, RateLimitError, UpstreamError

logger = logging.getLogger(__name__)


class EmailClient:
    """Transactional email over a Resend-style HTTP API."""

    def __init__(self, api_url: str, api_key: Optional[str], sender: str, *, timeout: int = DEFAULT_HTTP_TIMEOUT):
        self._api_url = api_url
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout

    def is_configured(self) -> bool:
        return bool(self._api_url and self._api_key)

    def send(self, *, to: Sequence[str], subject: str, html: str) -> Optional[str]:
        if not self.is_configured():
            raise ConfigurationError("Email API key is not configured")

        try:
            resp = requests.post(
                self._api_url,
                json={"from": self._sender, "to": list(to), "subject": subject, "html": html},
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("email provider unreachable: %s", e)
            raise UpstreamError("Email provider is unreachable") from e

        if resp.status_code == 429:
            raise RateLimitError("Email rate limit exceeded, please try again later")
        if resp.status_code >= 300:
            logger.error("email provider error %s: %s", resp.status_code, resp.text[:500])
            raise UpstreamError(f"Email provider error: {resp.status_code}", status_code=resp.status_code)

        try:
            return resp.json().get("id")
        except ValueError:
            return None
