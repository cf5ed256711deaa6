from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no session exists."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""


class MissingRateDataError(DomainError):
    """Raised when a statutory rate/bracket table is missing for the requested year.

    Calculators never substitute a default table.
    """


class ConfigurationError(DomainError):
    """Raised when a required setting (API key, URL) is not configured."""


class UpstreamError(DomainError):
    """Raised when a third-party service (AI gateway, email provider) fails."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class RateLimitError(UpstreamError):
    status_code = 429


class PaymentRequiredError(UpstreamError):
    status_code = 402
