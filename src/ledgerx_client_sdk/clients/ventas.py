from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Mapping

from ..exceptions import ApiError
from ..models_ventas import FacturaPosRequest, FacturaPosResponse, FacturasQuery, FacturasResponse
from .base import BaseClient, expect_dict, query_params
from .inventario import _map_stock_error
from .turnos import map_shift_error

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@dataclass
class VentasClient(BaseClient):
    def crear_factura_pos(self, payload: FacturaPosRequest | Mapping[str, Any]) -> FacturaPosResponse:
        request = payload if isinstance(payload, FacturaPosRequest) else FacturaPosRequest.model_validate(payload)
        try:
            data = self._request(
                "POST",
                "/api/ventas/pos/",
                json_body=request.model_dump(mode="json", exclude_none=True),
                module="ventas",
                operation="factura_pos",
                invalidate_paths=["/api/ventas/", "/api/auth/productos/"],
            )
        except ApiError as exc:
            raise _map_stock_error(map_shift_error(exc)) from exc
        return FacturaPosResponse.model_validate(expect_dict(data, "POS invoice"))

    def historial(self, query: FacturasQuery | Mapping[str, Any] | None = None) -> FacturasResponse:
        params = query_params(query) or {}
        params["_t"] = str(int(time.time() * 1000))
        data = self._request(
            "GET",
            "/api/ventas/facturas/",
            params=params,
            headers=dict(NO_CACHE_HEADERS),
            module="ventas",
            operation="historial",
            use_get_cache=False,
        )
        return FacturasResponse.model_validate(expect_dict(data, "sales history"))
