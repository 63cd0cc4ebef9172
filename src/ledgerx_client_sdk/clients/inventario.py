from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from ..exceptions import ApiError, InsufficientStockError
from ..models import MutationResponse
from ..models_inventario import (
    AjusteRequest,
    CargaMasivaResponse,
    InventarioAgrupadoResponse,
    InventarioDetalleResponse,
    InventarioQuery,
    TransferenciaRequest,
    parse_inventario_response,
)
from .base import BaseClient, query_params

_INVENTORY_PATH = "/api/auth/inventario/"
TEMPLATE_FILENAME = "plantilla_inventario.xlsx"


@dataclass
class InventarioClient(BaseClient):
    def get_inventario(
        self, query: InventarioQuery | Mapping[str, Any] | None = None
    ) -> InventarioDetalleResponse | InventarioAgrupadoResponse:
        data = self._request(
            "GET",
            _INVENTORY_PATH,
            params=query_params(query),
            module="inventario",
            operation="list",
            use_get_cache=False,
        )
        return parse_inventario_response(data or {})

    def ajuste(self, payload: AjusteRequest | Mapping[str, Any]) -> MutationResponse:
        request = payload if isinstance(payload, AjusteRequest) else AjusteRequest.model_validate(payload)
        try:
            data = self._request(
                "POST",
                f"{_INVENTORY_PATH}ajuste/",
                json_body=request.model_dump(mode="json"),
                module="inventario",
                operation="ajuste",
                invalidate_paths=[_INVENTORY_PATH],
            )
        except ApiError as exc:
            raise _map_stock_error(exc) from exc
        return MutationResponse.model_validate(data or {})

    def transferencia(self, payload: TransferenciaRequest | Mapping[str, Any]) -> MutationResponse:
        request = payload if isinstance(payload, TransferenciaRequest) else TransferenciaRequest.model_validate(payload)
        try:
            data = self._request(
                "POST",
                f"{_INVENTORY_PATH}transferencia/",
                json_body=request.model_dump(mode="json", exclude_none=True),
                module="inventario",
                operation="transferencia",
                invalidate_paths=[_INVENTORY_PATH],
            )
        except ApiError as exc:
            raise _map_stock_error(exc) from exc
        return MutationResponse.model_validate(data or {})

    def carga_masiva(self, file: str | Path | BinaryIO, sucursal_id: int) -> CargaMasivaResponse:
        """Upload a stock spreadsheet; quantities in the file replace current stock."""
        if isinstance(file, (str, Path)):
            path = Path(file)
            with path.open("rb") as handle:
                return self._upload(path.name, handle, sucursal_id)
        name = Path(getattr(file, "name", "inventario.xlsx")).name
        return self._upload(name, file, sucursal_id)

    def _upload(self, filename: str, handle: BinaryIO, sucursal_id: int) -> CargaMasivaResponse:
        try:
            data = self._request(
                "POST",
                f"{_INVENTORY_PATH}carga-masiva/",
                files={"file": (filename, handle)},
                data={"sucursal_id": str(sucursal_id)},
                module="inventario",
                operation="carga_masiva",
                invalidate_paths=[_INVENTORY_PATH],
            )
        except ApiError as exc:
            # row-level failures come back as 400 with the same envelope
            if isinstance(exc.data, dict) and isinstance(exc.data.get("errors"), list):
                return CargaMasivaResponse.model_validate({**exc.data, "success": False})
            raise
        return CargaMasivaResponse.model_validate(data or {})

    def descargar_plantilla(self) -> bytes:
        return self.http.download(
            f"{_INVENTORY_PATH}plantilla/",
            module="inventario",
            operation="plantilla",
        )


def _map_stock_error(exc: ApiError) -> ApiError:
    if exc.status in {400, 422} and "stock insuficiente" in exc.message.lower():
        return InsufficientStockError(message=exc.message, status=exc.status, data=exc.data)
    return exc
