from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Iterable

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DomainError,
    MissingRateDataError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_role() -> Role | None:
    value = session.get("role")
    return Role(value) if value else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please sign in to continue")
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please sign in to continue")
            if session.get("role") not in allowed:
                raise AuthorizationError("Insufficient permissions")
            return view(*args, **kwargs)

        return wrapper

    return decorator


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def install_cors(app: Flask, *, allow_origin: str = "*") -> None:
    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return "", 204
        return None

    @app.after_request
    def _cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = allow_origin
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        return response


def register_error_handlers(app: Flask) -> None:
    status_map: Iterable[tuple[type[DomainError], int]] = (
        (ValidationError, 400),
        (AuthenticationError, 401),
        (AuthorizationError, 403),
        (NotFoundError, 404),
    )
    for exc_type, status in status_map:
        app.register_error_handler(exc_type, lambda e, status=status: _error(str(e), status))

    @app.errorhandler(UpstreamError)
    def _upstream(e: UpstreamError):
        logger.error("upstream failure (%s): %s", e.status_code, e)
        status = e.status_code if e.status_code in (402, 429) else 500
        return _error(str(e), status)

    @app.errorhandler(MissingRateDataError)
    def _missing_rates(e: MissingRateDataError):
        logger.error("rate data missing: %s", e)
        return _error(str(e), 500)

    @app.errorhandler(ConfigurationError)
    def _configuration(e: ConfigurationError):
        logger.error("configuration error: %s", e)
        return _error(str(e), 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # Let Flask render its own 404/405 responses.
        code = getattr(e, "code", None)
        if isinstance(code, int) and code < 500:
            return _error(getattr(e, "description", str(e)), code)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return _error(str(e) or "Unknown error", 500)
