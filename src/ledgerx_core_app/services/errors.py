from __future__ import annotations

from dataclasses import dataclass

from ledgerx_client_sdk import to_user_facing_error
from ledgerx_client_sdk.exceptions import ApiError
from pydantic import ValidationError as PydanticValidationError


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    status: int | None = None
    error_type: str | None = None

    def __str__(self) -> str:
        return self.message


def normalize_error(exc: Exception, error_cls: type[ServiceError], fallback: str) -> ServiceError:
    if isinstance(exc, ServiceError):
        if isinstance(exc, error_cls):
            return exc
        return error_cls(message=exc.message, details=exc.details, status=exc.status, error_type=exc.error_type)
    if isinstance(exc, ApiError):
        user_facing = to_user_facing_error(exc)
        return error_cls(
            message=user_facing.message,
            details=user_facing.technical_details,
            status=exc.status,
            error_type=type(exc).__name__,
        )
    if isinstance(exc, PydanticValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return error_cls(
            message=f"{location}: {first.get('msg', 'dato inválido')}" if location else fallback,
            details="CLIENT_VALIDATION",
            error_type="ValidationError",
        )
    return error_cls(message=str(exc) or fallback, error_type=type(exc).__name__)
