from __future__ import annotations

import logging
from typing import Any, Mapping

from ledgerx_client_sdk import (
    ApiSession,
    Cliente,
    ClienteCreateRequest,
    FacturaPosRequest,
    FacturaPosResponse,
    Presentacion,
    Producto,
    ProductQuery,
    validate_new_client_payload,
)

from ledgerx_core_app.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)

POS_PRODUCT_PAGE_SIZE = 20
CLIENT_SEARCH_MIN_LENGTH = 3


class PosSalesServiceError(ServiceError):
    pass


class PosSalesService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def products(self, *, search: str = "", sucursal: int | None = None) -> list[Producto]:
        query = ProductQuery(search=search or None, page_size=POS_PRODUCT_PAGE_SIZE, activo=True, sucursal=sucursal)
        try:
            return self.session.productos_client().get_productos(query).results
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def first_presentation(self, producto_id: int) -> Presentacion | None:
        try:
            response = self.session.productos_client().get_presentaciones(producto_id)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        return response.data[0] if response.data else None

    def search_clients(self, term: str) -> list[Cliente]:
        if len(term or "") < CLIENT_SEARCH_MIN_LENGTH:
            return []
        try:
            return self.session.clientes_client().get_clientes(search=term).results
        except Exception as exc:
            raise self._normalize_error(exc) from exc

    def create_client(self, payload: Mapping[str, Any]) -> Cliente:
        check = validate_new_client_payload(
            tipo_identificacion=payload.get("tipo_identificacion"),
            identificacion=payload.get("identificacion"),
            razon_social=payload.get("razon_social"),
            email=payload.get("email"),
        )
        if not check.ok:
            raise PosSalesServiceError(message=check.summary or "Datos de cliente inválidos", details="CLIENT_VALIDATION")
        try:
            request = ClienteCreateRequest.model_validate(
                {key: value for key, value in payload.items() if key in ClienteCreateRequest.model_fields}
            )
            cliente = self.session.clientes_client().crear_cliente(request)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        logger.info("client_created", extra={"cliente_id": cliente.id})
        return cliente

    def checkout(self, request: FacturaPosRequest) -> FacturaPosResponse:
        try:
            response = self.session.ventas_client().crear_factura_pos(request)
        except Exception as exc:
            raise self._normalize_error(exc) from exc
        logger.info(
            "pos_invoice_created",
            extra={"estado_sri": response.estado_sri, "items": len(request.items), "total": request.pago.total},
        )
        return response

    @staticmethod
    def _normalize_error(exc: Exception) -> PosSalesServiceError:
        return normalize_error(exc, PosSalesServiceError, "Error al procesar venta")
