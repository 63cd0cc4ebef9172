from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    safe_to_retry: bool
    status: int | None
    details: dict[str, Any]


class ErrorPresenter:
    """Maps backend/client failures to consistent, Spanish user-facing payloads."""

    _CATEGORY_MESSAGES = {
        "validation": "Revise los datos ingresados e intente nuevamente.",
        "auth": "Su sesión ha expirado. Inicie sesión nuevamente.",
        "permission_denied": "No tiene permisos para realizar esta acción.",
        "conflict": "La acción no puede completarse en el estado actual.",
        "not_found": "El registro solicitado no existe.",
        "transport": "Problema temporal de conexión. Intente nuevamente.",
        "server": "Error del servidor. Intente más tarde.",
        "unknown": "Error inesperado. Intente nuevamente.",
    }

    def present(
        self,
        *,
        message: str,
        details: Any = None,
        status: int | None = None,
        action: str,
        allow_retry: bool = False,
    ) -> PresentedError:
        category = self._categorize(message=message, details=details, status=status)
        safe_to_retry = allow_retry and category in {"transport", "server"}
        technical = {
            "status": status,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "raw_details": details,
            "message": message,
        }
        return PresentedError(
            category=category,
            user_message=self._CATEGORY_MESSAGES[category],
            safe_to_retry=safe_to_retry,
            status=status,
            details=technical,
        )

    def _categorize(self, *, message: str, details: Any, status: int | None) -> str:
        if status is not None:
            if status == 0:
                return "transport"
            if status in {400, 422}:
                return "validation"
            if status == 401:
                return "auth"
            if status == 403:
                return "permission_denied"
            if status == 404:
                return "not_found"
            if status == 409:
                return "conflict"
            if status >= 500:
                return "server"
        haystack = f"{message} {details}".lower()
        if any(token in haystack for token in {"obligatori", "inválid", "invalid", "requerid", "debe"}):
            return "validation"
        if any(token in haystack for token in {"permiso", "forbidden", "denegad"}):
            return "permission_denied"
        if any(token in haystack for token in {"timeout", "conexión", "connection", "network"}):
            return "transport"
        return "unknown"
