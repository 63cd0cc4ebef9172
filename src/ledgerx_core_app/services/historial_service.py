from __future__ import annotations

from typing import Any

from ledgerx_client_sdk import ApiSession, FacturasQuery, FacturasResponse, GuiasQuery, GuiasResponse

from ledgerx_core_app.services.errors import ServiceError, normalize_error


class HistorialServiceError(ServiceError):
    pass


class HistorialService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def invoices(self, **filters: Any) -> FacturasResponse:
        try:
            return self.session.ventas_client().historial(FacturasQuery.model_validate(filters))
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def guides(self, **filters: Any) -> GuiasResponse:
        try:
            return self.session.guias_client().get_guias(GuiasQuery.model_validate(filters), fresh=True)
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    @staticmethod
    def _normalize_error(exc: Exception) -> HistorialServiceError:
        return normalize_error(exc, HistorialServiceError, "Error cargando historial")
