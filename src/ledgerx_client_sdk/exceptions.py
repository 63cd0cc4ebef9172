from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    message: str
    status: int
    data: object | None = None

    def __str__(self) -> str:
        return f"[{self.status}] {self.message}"

    @property
    def details(self) -> object | None:
        if isinstance(self.data, dict):
            return self.data.get("errors") or self.data.get("detail") or self.data.get("error")
        return self.data


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or session is invalid."""


class PermissionError(ForbiddenError):
    """Authorization denied for the current user or tenant."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class ShiftNotOpenError(ValidationError):
    """The backend refused an operation because no shift (turno) is open."""


class ShiftAlreadyOpenError(ConflictError):
    pass


class InsufficientStockError(ValidationError):
    pass
