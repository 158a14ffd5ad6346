"""JSON helpers shared by the controllers."""

from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def error_response(exc: DomainError):
    return jsonify({"error": str(exc)}), status_for(exc)


def read_json() -> dict[str, Any]:
    """Request body as a dict; malformed or missing bodies become {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def query_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
