from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ledgerx_client_sdk import Guia, GuiasResponse

from ledgerx_core_app.ui.history.history_list_view import SriHistoryView


@dataclass
class GuidesHistoryView(SriHistoryView):
    module: ClassVar[str] = "guides_history"
    filter_keys: ClassVar[tuple[str, ...]] = ("page", "start_date", "end_date", "search", "estado_sri")

    def _fetch(self, filters: dict[str, Any]) -> GuiasResponse:
        return self.service.guides(**filters)

    def _render_row(self, row: Guia) -> dict[str, Any]:
        payload = super()._render_row(row)
        payload["destinatarios"] = len(row.destinatarios)
        return payload
