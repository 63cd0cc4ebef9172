from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ledgerx_client_sdk import Factura, FacturasResponse

from ledgerx_core_app.ui.history.history_list_view import HISTORY_PAGE_SIZE, SriHistoryView


@dataclass
class SalesHistoryView(SriHistoryView):
    module: ClassVar[str] = "sales_history"

    def _fetch(self, filters: dict[str, Any]) -> FacturasResponse:
        return self.service.invoices(page_size=HISTORY_PAGE_SIZE, **filters)

    def _render_row(self, row: Factura) -> dict[str, Any]:
        payload = super()._render_row(row)
        payload["total"] = row.total_con_impuestos or 0
        return payload
