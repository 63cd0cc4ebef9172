from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Mapping

from ledgerx_client_sdk import (
    AjusteRequest,
    ApiSession,
    CargaMasivaResponse,
    InventarioAgrupadoResponse,
    InventarioDetalleResponse,
    InventarioQuery,
    MutationResponse,
    Producto,
    ProductQuery,
    Sucursal,
    TransferenciaRequest,
)
from ledgerx_client_sdk.clients.inventario import TEMPLATE_FILENAME

from ledgerx_core_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

DROPDOWN_PAGE_SIZE = 100


class InventarioServiceError(ServiceError):
    pass


class InventarioService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def inventory(
        self,
        *,
        sucursal: int | None,
        search: str = "",
        agrupado: bool,
    ) -> InventarioDetalleResponse | InventarioAgrupadoResponse:
        query = InventarioQuery(sucursal=sucursal, search=search or None, agrupado=agrupado)
        try:
            return self.session.inventario_client().get_inventario(query)
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def branches(self) -> list[Sucursal]:
        try:
            return self.session.sucursales_client().get_sucursales(page_size=DROPDOWN_PAGE_SIZE).results
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def products(self) -> list[Producto]:
        query = ProductQuery(page_size=DROPDOWN_PAGE_SIZE, activo=True)
        try:
            return self.session.productos_client().get_productos(query).results
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def adjust(self, payload: AjusteRequest | Mapping[str, Any]) -> MutationResponse:
        try:
            response = self.session.inventario_client().ajuste(payload)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        logger.info("inventory_adjusted")
        return response

    def transfer(self, payload: TransferenciaRequest | Mapping[str, Any]) -> MutationResponse:
        try:
            response = self.session.inventario_client().transferencia(payload)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        logger.info("inventory_transferred")
        return response

    def bulk_import(self, file: str | Path | BinaryIO, sucursal_id: int) -> CargaMasivaResponse:
        try:
            response = self.session.inventario_client().carga_masiva(file, sucursal_id)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        if not response.success:
            logger.warning("inventory_import_rejected", extra={"errors": len(response.errors)})
        return response

    def download_template(self, destination: str | Path | None = None) -> Path:
        target = Path(destination) if destination else Path(TEMPLATE_FILENAME)
        if target.is_dir():
            target = target / TEMPLATE_FILENAME
        try:
            content = self.session.inventario_client().descargar_plantilla()
        except Exception as exc:
            raise InventarioServiceError(
                message="Error descargando plantilla",
                details=str(exc),
                status=getattr(exc, "status", None),
            ) from exc
        target.write_bytes(content)
        return target

    @staticmethod
    def _normalize_error(exc: Exception) -> InventarioServiceError:
        return normalize_error(exc, InventarioServiceError, "Error cargando datos")
