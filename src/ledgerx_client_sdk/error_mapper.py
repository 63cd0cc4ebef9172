from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

DEFAULT_ERROR_MESSAGE = "Error en la petición"


def extract_message(payload: Mapping[str, object] | None, fallback: str | None = None) -> str:
    payload = payload or {}
    for key in ("detail", "error", "message"):
        value = payload.get(key)
        if value:
            return str(value)
    return fallback or DEFAULT_ERROR_MESSAGE


def map_error(status: int, payload: Mapping[str, object] | None, reason: str | None = None) -> ApiError:
    payload = payload or {}
    message = extract_message(payload, reason)
    mapped: type[ApiError]
    if status in {401}:
        mapped = AuthError
    elif status in {403}:
        mapped = PermissionError
    elif status in {404}:
        mapped = NotFoundError
    elif status in {400, 422}:
        mapped = ValidationError
    elif status == 409:
        mapped = ConflictError
    elif status == 429:
        mapped = RateLimitError
    elif status >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(message=message, status=status, data=dict(payload))
