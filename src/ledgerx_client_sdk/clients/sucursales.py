from __future__ import annotations

from dataclasses import dataclass

from ..models_sucursales import SucursalesListResponse, SucursalesUsuarioResponse
from .base import BaseClient, expect_dict, query_params


@dataclass
class SucursalesClient(BaseClient):
    def get_sucursales_usuario(self) -> SucursalesUsuarioResponse:
        """Branches the current user may open a shift in."""
        data = self._request(
            "GET",
            "/api/auth/usuarios/sucursales/",
            module="sucursales",
            operation="usuario",
        )
        return SucursalesUsuarioResponse.model_validate(expect_dict(data, "user branches"))

    def get_sucursales(
        self,
        *,
        page: int | None = None,
        page_size: int | None = None,
        search: str | None = None,
        es_matriz: bool | None = None,
    ) -> SucursalesListResponse:
        data = self._request(
            "GET",
            "/api/auth/sucursales/",
            params=query_params({"page": page, "page_size": page_size, "search": search, "es_matriz": es_matriz}),
            module="sucursales",
            operation="list",
        )
        return SucursalesListResponse.model_validate(data or {})
