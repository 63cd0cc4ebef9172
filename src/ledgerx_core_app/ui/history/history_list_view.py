from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ledgerx_client_sdk.models_ventas import SRI_PROCESSING

from ledgerx_core_app.services.errors import ServiceError
from ledgerx_core_app.shared.telemetry.events import build_event
from ledgerx_core_app.shared.telemetry.logger import TelemetryLogger
from ledgerx_core_app.ui.history.components.sri_badge import SriBadge
from ledgerx_core_app.ui.history.sri_poller import DEFAULT_POLL_INTERVAL_SECONDS, SriStatusPoller
from ledgerx_core_app.ui.shared.request_sequencer import RequestSequencer
from ledgerx_core_app.ui.shared.view_state import resolve_state

HISTORY_PAGE_SIZE = 20


def page_count(count: int, page_size: int = HISTORY_PAGE_SIZE) -> int:
    return max(1, math.ceil(max(count, 0) / page_size))


@dataclass
class SriHistoryView(ABC):
    """Paged list of SRI documents, refreshed while any of them is in ``PPR``."""

    module: ClassVar[str] = "history"
    filter_keys: ClassVar[tuple[str, ...]] = ("page", "start_date", "end_date", "search")

    service: Any
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="core_app", enabled=False))
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    filters: dict[str, Any] = field(default_factory=lambda: {"page": 1})
    rows: list[Any] = field(default_factory=list)
    count: int = 0
    is_loading: bool = False
    error_message: str | None = None
    mounted: bool = False
    poller: SriStatusPoller | None = field(default=None, repr=False)
    _requests: RequestSequencer = field(default_factory=RequestSequencer, repr=False)

    def __post_init__(self) -> None:
        if self.poller is None:
            self.poller = SriStatusPoller(
                refresh=self.refresh,
                has_pending=self.has_pending,
                interval_seconds=self.poll_interval_seconds,
                name=f"{self.module}-sri-poller",
            )

    @abstractmethod
    def _fetch(self, filters: dict[str, Any]) -> Any:
        """Return a paged response with ``count`` and ``results`` for the given filters."""

    def mount(self) -> bool:
        self.mounted = True
        loaded = self.load()
        self._emit("navigation", f"{self.module}.mount", success=loaded)
        return loaded

    def unmount(self) -> None:
        self.mounted = False
        self.poller.stop()
        self._requests.invalidate()

    def load(self, **filters: Any) -> bool:
        unknown = set(filters) - set(self.filter_keys)
        if unknown:
            raise ValueError(f"Unsupported filters: {sorted(unknown)}")
        if filters:
            merged = {**self.filters, **filters}
            if "page" not in filters:
                merged["page"] = 1
            self.filters = merged
        token = self._requests.issue()
        self.is_loading = True
        query = {key: value for key, value in self.filters.items() if value not in (None, "")}
        try:
            response = self._fetch(query)
        except ServiceError as exc:
            if self._requests.is_current(token):
                self.error_message = exc.message
                self.is_loading = False
            self._emit("api_call_result", f"{self.module}.load", success=False, error_code=exc.error_type)
            return False
        if not self._requests.is_current(token):
            return False
        self.rows = list(response.results)
        self.count = response.count or len(self.rows)
        self.error_message = None
        self.is_loading = False
        if self.mounted and self.has_pending():
            self.poller.start()
        return True

    def refresh(self) -> bool:
        return self.load()

    def go_to_page(self, page: int) -> bool:
        page = min(max(1, page), self.page_count)
        return self.load(page=page)

    @property
    def page(self) -> int:
        return int(self.filters.get("page") or 1)

    @property
    def page_count(self) -> int:
        return page_count(self.count)

    def has_pending(self) -> bool:
        return any(getattr(row, "estado_sri", None) == SRI_PROCESSING for row in self.rows)

    def _render_row(self, row: Any) -> dict[str, Any]:
        payload = row.model_dump(mode="json", exclude_none=True)
        payload["sri_badge"] = SriBadge(row.estado_sri).render()
        return payload

    def render(self) -> dict[str, Any]:
        state = resolve_state(is_loading=self.is_loading, error=self.error_message, has_data=bool(self.rows))
        return {
            "filters": dict(self.filters),
            "rows": [self._render_row(row) for row in self.rows],
            "count": self.count,
            "page": self.page,
            "page_count": self.page_count,
            "polling": self.poller.is_running,
            "error": self.error_message,
            "view_state": state.render(),
        }

    def _emit(self, category: str, action: str, *, success: bool, error_code: str | None = None) -> None:
        self.telemetry.emit(
            build_event(
                category=category,
                name="screen_view" if category == "navigation" else "api_call_result",
                module=self.module,
                action=action,
                success=success,
                error_code=error_code,
            )
        )
