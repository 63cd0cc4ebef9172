from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_clientes import Cliente, ClienteCreateRequest, ClientesListResponse, unwrap_cliente
from .base import BaseClient, query_params


@dataclass
class ClientesClient(BaseClient):
    def get_clientes(self, search: str | None = None, page: int | None = None) -> ClientesListResponse:
        data = self._request(
            "GET",
            "/api/clientes/",
            params=query_params({"search": search, "page": page}),
            module="clientes",
            operation="list",
        )
        return ClientesListResponse.model_validate(data or {})

    def crear_cliente(self, payload: ClienteCreateRequest | Mapping[str, Any]) -> Cliente:
        request = payload if isinstance(payload, ClienteCreateRequest) else ClienteCreateRequest.model_validate(payload)
        data = self._request(
            "POST",
            "/api/clientes/",
            json_body=request.model_dump(mode="json", exclude_none=True),
            module="clientes",
            operation="create",
            invalidate_paths=["/api/clientes/"],
        )
        return Cliente.model_validate(unwrap_cliente(data))
