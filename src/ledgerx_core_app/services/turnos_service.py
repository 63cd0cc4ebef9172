from __future__ import annotations

import logging
from typing import Any, Mapping

from ledgerx_client_sdk import (
    ApiSession,
    CierreTurnoRequest,
    SucursalSimple,
    Turno,
    TurnosHistoricoResponse,
    TurnoStatus,
    validate_open_shift_payload,
)
from ledgerx_client_sdk.clients.turnos import map_shift_error
from ledgerx_client_sdk.exceptions import ApiError, NotFoundError
from ledgerx_client_sdk.models_turnos import CierreTurnoResponse

from ledgerx_core_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


class TurnosServiceError(ServiceError):
    pass


class TurnosService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def active_shift(self) -> TurnoStatus:
        try:
            return self.session.turnos_client().verificar_turno()
        except NotFoundError:
            # older deployments only expose the auth endpoint
            logger.info("verificar_turno_unavailable_falling_back")
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        try:
            return self.session.auth_client().turno_activo()
        except ApiError as exc:
            raise self._normalize_error(map_shift_error(exc)) from exc
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def branches(self) -> list[SucursalSimple]:
        try:
            response = self.session.sucursales_client().get_sucursales_usuario()
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        return response.sucursales

    def open_shift(self, sucursal_id: int | None) -> Turno:
        check = validate_open_shift_payload(sucursal_id)
        if not check.ok:
            raise TurnosServiceError(message=check.summary or "Seleccione una sucursal", details="CLIENT_VALIDATION")
        try:
            response = self.session.turnos_client().abrir_turno(int(sucursal_id))
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        if not response.success or response.data is None:
            raise TurnosServiceError(message=response.error or response.message or "Error al abrir turno")
        logger.info("shift_opened", extra={"turno_id": response.data.id, "sucursal_id": sucursal_id})
        turno = response.data
        if turno.sucursal is None:
            turno = turno.model_copy(update={"sucursal": int(sucursal_id)})
        return turno

    def close_shift(self, declaration: CierreTurnoRequest | Mapping[str, Any]) -> CierreTurnoResponse:
        try:
            response = self.session.turnos_client().cerrar_turno(declaration)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        logger.info("shift_closed")
        return response

    def history(self, **filters: Any) -> TurnosHistoricoResponse:
        try:
            return self.session.turnos_client().historico(filters)
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    @staticmethod
    def _normalize_error(exc: Exception) -> TurnosServiceError:
        return normalize_error(exc, TurnosServiceError, "Error en la gestión del turno")
