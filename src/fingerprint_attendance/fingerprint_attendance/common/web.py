from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, g, jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DepartmentNotEmptyError,
    DomainError,
    DuplicateError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from .datetime_utils import parse_iso_date, parse_iso_datetime

logger = logging.getLogger(__name__)

# Most specific first: DepartmentNotEmptyError is a ConflictError.
_STATUS_BY_ERROR = (
    (ValidationError, 400, "validation"),
    (AuthenticationError, 401, "authentication"),
    (AuthorizationError, 403, "authorization"),
    (NotFoundError, 404, "not_found"),
    (DuplicateError, 409, "duplicate"),
    (DepartmentNotEmptyError, 409, "non_empty"),
    (ConflictError, 409, "conflict"),
    (TransientError, 503, "transient"),
)


def to_json(value: Any) -> Any:
    """Convert views (frozen dataclasses) into JSON-ready structures."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    return value


def ok(value: Any, status: int = 200):
    return jsonify(to_json(value)), status


def error_kind(exc: DomainError) -> tuple[int, str]:
    for exc_type, status, kind in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status, kind
    return 400, "domain"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status, kind = error_kind(exc)
        body = {"error": str(exc), "kind": kind, "retryable": isinstance(exc, TransientError)}
        if isinstance(exc, DepartmentNotEmptyError):
            body["staff_count"] = exc.staff_count
        return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def body_date(data: dict, key: str) -> date:
    value = data.get(key)
    if value is None:
        raise ValidationError(f"{key} is required")
    return parse_iso_date(str(value))


def body_datetime(data: dict, key: str) -> datetime:
    value = data.get(key)
    if value is None:
        raise ValidationError(f"{key} is required")
    return parse_iso_datetime(str(value))


def body_int(data: dict, key: str, *, required: bool = False) -> Optional[int]:
    value = data.get(key)
    if value is None:
        if required:
            raise ValidationError(f"{key} is required")
        return None
    # JSON true/false would otherwise pass as 1/0.
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer: {value!r}")


def body_bool(data: dict, key: str, default: Optional[bool] = None) -> Optional[bool]:
    """Accept only JSON booleans; strings such as "false" are rejected."""

    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false")
    return value


def bearer_required(verify: Callable, *, role: Role | None = Role.ADMIN):
    """Build a decorator that resolves the bearer token into ``g.principal``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            scheme, _, token = header.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthenticationError("Missing bearer token")

            principal = verify(token.strip())
            if role is not None and principal.role != role:
                logger.warning("Principal %s with role %s denied", principal.user_id, principal.role.value)
                raise AuthorizationError("You do not have permission for this action")

            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return decorator
