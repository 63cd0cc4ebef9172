from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ledgerx_client_sdk import TurnoHistorico

from ledgerx_core_app.services.turnos_service import TurnosService, TurnosServiceError
from ledgerx_core_app.ui.history.history_list_view import page_count
from ledgerx_core_app.ui.shared.view_state import resolve_state


@dataclass
class ShiftHistoryView:
    service: TurnosService
    filters: dict[str, Any] = field(default_factory=lambda: {"page": 1})
    rows: list[TurnoHistorico] = field(default_factory=list)
    count: int = 0
    is_loading: bool = False
    error_message: str | None = None

    def load(self, **filters: Any) -> bool:
        if filters:
            self.filters = {**self.filters, **filters}
        self.is_loading = True
        try:
            response = self.service.history(**{k: v for k, v in self.filters.items() if v not in (None, "")})
            self.rows = list(response.results)
            self.count = response.count if response.count is not None else len(self.rows)
            self.error_message = None
            return True
        except TurnosServiceError as exc:
            self.error_message = exc.message
            self.rows = []
            return False
        finally:
            self.is_loading = False

    def render(self) -> dict[str, Any]:
        state = resolve_state(is_loading=self.is_loading, error=self.error_message, has_data=bool(self.rows))
        return {
            "filters": dict(self.filters),
            "rows": [row.model_dump(mode="json", exclude_none=True) for row in self.rows],
            "count": self.count,
            "page_count": page_count(self.count),
            "error": self.error_message,
            "view_state": state.render(),
        }
