from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_ventas import GuiasQuery, GuiasResponse
from .base import BaseClient, expect_dict, query_params


@dataclass
class GuiasClient(BaseClient):
    def get_guias(self, query: GuiasQuery | Mapping[str, Any] | None = None, *, fresh: bool = False) -> GuiasResponse:
        data = self._request(
            "GET",
            "/api/guias/",
            params=query_params(query),
            module="guias",
            operation="list",
            use_get_cache=not fresh,
        )
        return GuiasResponse.model_validate(expect_dict(data, "guides"))
