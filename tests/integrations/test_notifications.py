from __future__ import annotations

import pytest

from src.hris_system.hris_system.core.exceptions import ConfigurationError, UpstreamError, ValidationError
from src.hris_system.hris_system.notifications import email_client as email_module
from src.hris_system.hris_system.notifications.email_client import EmailClient
from src.hris_system.hris_system.notifications.service import INVITATION_SUBJECT, NotificationService


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload if payload is not None else {"id": "msg_1"}
        self.text = text

    def json(self):
        return self._payload


class Recorded(list):
    pass


@pytest.fixture()
def outbox(monkeypatch):
    recorded = Recorded()
    recorded.status = 200

    def fake_post(url, **kwargs):
        recorded.append({"url": url, **kwargs})
        return FakeResponse(status_code=recorded.status)

    monkeypatch.setattr(email_module.requests, "post", fake_post)
    return recorded


def _service(key="re_key"):
    return NotificationService(EmailClient("https://mail.example/emails", key, "HR <hr@example.mx>", timeout=3))


def test_send_email_posts_provider_payload(outbox):
    receipt = _service().send_email(to=["Ana@Example.mx", "ana@example.mx"], subject="Hello", html="<p>Hi</p>")

    assert receipt.message_id == "msg_1"
    assert receipt.recipients == ("ana@example.mx",)
    call = outbox[0]
    assert call["url"] == "https://mail.example/emails"
    assert call["json"] == {
        "from": "HR <hr@example.mx>",
        "to": ["ana@example.mx"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }
    assert call["headers"]["Authorization"] == "Bearer re_key"
    assert call["timeout"] == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"to": "not-an-email", "subject": "s", "html": "h"},
        {"to": [], "subject": "s", "html": "h"},
        {"to": 42, "subject": "s", "html": "h"},
        {"to": "a@b.mx", "subject": "", "html": "h"},
        {"to": "a@b.mx", "subject": "s", "html": " "},
    ],
)
def test_send_email_validation(outbox, kwargs):
    with pytest.raises(ValidationError):
        _service().send_email(**kwargs)
    assert outbox == []


def test_provider_errors_surface(outbox):
    outbox.status = 500
    with pytest.raises(UpstreamError):
        _service().send_email(to="a@b.mx", subject="s", html="h")


def test_unconfigured_provider(outbox):
    service = _service(key=None)

    assert not service.email_enabled
    with pytest.raises(ConfigurationError):
        service.send_email(to="a@b.mx", subject="s", html="h")


def test_invitation_escapes_user_values(outbox):
    _service().send_invitation(email="new@demo.mx", full_name="<b>Eve</b>", temp_password="Pa$$w0rd!")

    payload = outbox[0]["json"]
    assert payload["subject"] == INVITATION_SUBJECT
    assert "&lt;b&gt;Eve&lt;/b&gt;" in payload["html"]
    assert "Pa$$w0rd!" in payload["html"]
