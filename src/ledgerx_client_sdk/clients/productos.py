from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_productos import PresentacionesResponse, ProductosListResponse, ProductQuery
from .base import BaseClient, expect_dict, query_params


@dataclass
class ProductosClient(BaseClient):
    def get_productos(self, query: ProductQuery | Mapping[str, Any] | None = None) -> ProductosListResponse:
        data = self._request(
            "GET",
            "/api/auth/productos/",
            params=query_params(query),
            module="productos",
            operation="list",
            use_get_cache=False,
        )
        return ProductosListResponse.model_validate(data or {})

    def get_presentaciones(self, producto_id: int) -> PresentacionesResponse:
        data = self._request(
            "GET",
            f"/api/auth/productos/{producto_id}/presentaciones/",
            module="productos",
            operation="presentaciones",
        )
        if isinstance(data, list):
            data = {"data": data}
        return PresentacionesResponse.model_validate(expect_dict(data, "presentaciones"))
