"""JSON envelope ``{message?, body?}`` and exception -> status mapping."""
from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 400),
    (ConflictError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
]


def envelope(*, message: Optional[str] = None, body: Any = None, status: int = 200, **extra: Any):
    payload: dict[str, Any] = {}
    if message is not None:
        payload["message"] = message
    if body is not None:
        payload["body"] = body
    payload.update(extra)
    return jsonify(payload), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def status_for(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        if isinstance(exc, ValidationError) and exc.errors:
            return envelope(message=str(exc), status=400, errors=exc.errors)
        return envelope(message=str(exc), status=status_for(exc))

    @app.errorhandler(InfrastructureError)
    def _infrastructure_error(exc: InfrastructureError):
        logger.error("infrastructure failure on %s %s", request.method, request.path, exc_info=exc)
        return envelope(message="Internal server error", status=500)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return envelope(message=exc.description or exc.name, status=exc.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("unhandled exception on %s %s", request.method, request.path)
        return envelope(message="Internal server error", status=500)
