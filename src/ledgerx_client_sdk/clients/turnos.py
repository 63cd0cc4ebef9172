from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..exceptions import ApiError, ShiftAlreadyOpenError, ShiftNotOpenError
from ..models_turnos import (
    AbrirTurnoRequest,
    AbrirTurnoResponse,
    CierreTurnoRequest,
    CierreTurnoResponse,
    TurnoHistoricoQuery,
    TurnosHistoricoResponse,
    TurnoStatus,
)
from .base import BaseClient, expect_dict, query_params

_NOT_OPEN_HINTS = ("no tiene un turno", "no tiene turno", "no hay turno", "sin turno", "turno no encontrado")
_ALREADY_OPEN_HINTS = ("ya tiene un turno", "turno abierto", "turno activo")


@dataclass
class TurnosClient(BaseClient):
    def verificar_turno(self) -> TurnoStatus:
        try:
            data = self._request(
                "GET",
                "/api/turnos/verificar/",
                module="turnos",
                operation="verificar",
                use_get_cache=False,
            )
        except ApiError as exc:
            raise map_shift_error(exc) from exc
        return TurnoStatus.model_validate(expect_dict(data, "shift status"))

    def abrir_turno(self, sucursal_id: int) -> AbrirTurnoResponse:
        request = AbrirTurnoRequest(sucursal_id=sucursal_id)
        try:
            data = self._request(
                "POST",
                "/api/turnos/abrir/",
                json_body=request.model_dump(mode="json"),
                module="turnos",
                operation="abrir",
                invalidate_paths=["/api/turnos/"],
            )
        except ApiError as exc:
            raise map_shift_error(exc) from exc
        return AbrirTurnoResponse.model_validate(expect_dict(data, "open shift"))

    def cerrar_turno(self, payload: CierreTurnoRequest | Mapping[str, Any]) -> CierreTurnoResponse:
        request = payload if isinstance(payload, CierreTurnoRequest) else CierreTurnoRequest.model_validate(payload)
        try:
            data = self._request(
                "POST",
                "/api/turnos/cerrar/",
                json_body=request.model_dump(mode="json", exclude_none=True),
                module="turnos",
                operation="cerrar",
                invalidate_paths=["/api/turnos/"],
            )
        except ApiError as exc:
            raise map_shift_error(exc) from exc
        return CierreTurnoResponse.model_validate(data or {})

    def historico(self, query: TurnoHistoricoQuery | Mapping[str, Any] | None = None) -> TurnosHistoricoResponse:
        data = self._request(
            "GET",
            "/api/turnos/",
            params=query_params(query),
            module="turnos",
            operation="historico",
        )
        if isinstance(data, list):
            data = {"count": len(data), "results": data}
        return TurnosHistoricoResponse.model_validate(expect_dict(data, "shift history"))


def map_shift_error(exc: ApiError) -> ApiError:
    if exc.status not in {400, 409, 422}:
        return exc
    text = exc.message.lower()
    if any(hint in text for hint in _NOT_OPEN_HINTS):
        return ShiftNotOpenError(message=exc.message, status=exc.status, data=exc.data)
    if any(hint in text for hint in _ALREADY_OPEN_HINTS):
        return ShiftAlreadyOpenError(message=exc.message, status=exc.status, data=exc.data)
    return exc
