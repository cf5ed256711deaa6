from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from typing import Iterable, Optional, Union

from ..common.validators import require_email, require_non_empty
from ..core.exceptions import ValidationError
from .email_client import EmailClient

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "Welcome to HRIS - Your Account is Ready"


@dataclass(frozen=True)
class EmailReceipt:
    recipients: tuple[str, ...]
    subject: str
    message_id: Optional[str]

    def to_dict(self) -> dict:
        return {"success": True, "recipients": list(self.recipients), "subject": self.subject, "id": self.message_id}


class NotificationService:
    def __init__(self, email: EmailClient):
        self._email = email

    @property
    def email_enabled(self) -> bool:
        return self._email.is_configured()

    def send_email(self, *, to: Union[str, Iterable[str]], subject: str, html: str) -> EmailReceipt:
        if isinstance(to, str):
            to = [to]
        elif not isinstance(to, (list, tuple, set)):
            raise ValidationError("to must be an email address or a list of them")
        recipients = tuple(dict.fromkeys(require_email(addr, "to") for addr in to))
        if not recipients:
            raise ValidationError("At least one recipient is required")
        subject = require_non_empty(subject, "subject")
        html = require_non_empty(html, "html")

        message_id = self._email.send(to=recipients, subject=subject, html=html)
        logger.info("email '%s' sent to %d recipient(s)", subject, len(recipients))
        return EmailReceipt(recipients=recipients, subject=subject, message_id=message_id)

    def send_invitation(self, *, email: str, full_name: Optional[str], temp_password: str) -> EmailReceipt:
        name = escape(full_name or "there")
        html = (
            "<h1>Welcome to HRIS!</h1>"
            f"<p>Hi {name},</p>"
            "<p>Your account has been created. Here are your login credentials:</p>"
            f"<p><strong>Email:</strong> {escape(email)}</p>"
            f"<p><strong>Temporary Password:</strong> {escape(temp_password)}</p>"
            "<p>Please log in and change your password immediately.</p>"
            "<p>Best regards,<br>The HR Team</p>"
        )
        return self.send_email(to=email, subject=INVITATION_SUBJECT, html=html)
