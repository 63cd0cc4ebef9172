from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ledgerx_client_sdk import Cliente
from ledgerx_client_sdk.models_clientes import TIPO_CEDULA, TIPOS_IDENTIFICACION

from ledgerx_core_app.services.pos_sales_service import CLIENT_SEARCH_MIN_LENGTH, PosSalesService, PosSalesServiceError
from ledgerx_core_app.ui.shared.request_sequencer import RequestSequencer

logger = logging.getLogger(__name__)


def _blank_client() -> dict[str, Any]:
    return {
        "tipo_identificacion": TIPO_CEDULA,
        "identificacion": "",
        "razon_social": "",
        "email": "",
        "direccion": "",
    }


@dataclass
class CustomerDialog:
    service: PosSalesService
    is_open: bool = False
    search_term: str = ""
    results: list[Cliente] = field(default_factory=list)
    is_searching: bool = False
    new_client_mode: bool = False
    new_client: dict[str, Any] = field(default_factory=_blank_client)
    error_message: str | None = None
    is_submitting: bool = False
    _sequencer: RequestSequencer = field(default_factory=RequestSequencer, repr=False)

    def open(self) -> None:
        self.is_open = True
        self.error_message = None

    def close(self) -> None:
        self.is_open = False
        self.new_client_mode = False
        self.new_client = _blank_client()
        self.search_term = ""
        self.results = []
        self._sequencer.invalidate()

    def start_new_client(self) -> None:
        self.new_client_mode = True
        self.new_client = _blank_client()
        self.error_message = None

    def search(self, term: str) -> dict[str, Any]:
        self.search_term = term
        if len(term or "") < CLIENT_SEARCH_MIN_LENGTH:
            return {"ok": True, "skipped": True, "results": []}
        token = self._sequencer.issue()
        self.is_searching = True
        try:
            found = self.service.search_clients(term)
        except PosSalesServiceError as exc:
            logger.warning("client_search_failed", extra={"error": exc.message})
            if self._sequencer.is_current(token):
                self.error_message = exc.message
            return {"ok": False, "error": exc.message}
        finally:
            if self._sequencer.is_current(token):
                self.is_searching = False
        if not self._sequencer.is_current(token):
            return {"ok": False, "stale": True}
        self.results = found
        return {"ok": True, "results": [row.model_dump(mode="json", exclude_none=True) for row in found]}

    def create(self, data: dict[str, Any] | None = None) -> dict[str, Any]:
        if data is not None:
            self.new_client = {**_blank_client(), **data}
        if self.is_submitting:
            return {"ok": False, "error": "Creación de cliente en proceso"}
        self.is_submitting = True
        try:
            cliente = self.service.create_client(self.new_client)
        except PosSalesServiceError as exc:
            self.error_message = exc.message
            return {"ok": False, "error": exc.message, "values": dict(self.new_client)}
        finally:
            self.is_submitting = False
        self.error_message = None
        return {"ok": True, "cliente": cliente}

    def render(self) -> dict[str, Any]:
        return {
            "open": self.is_open,
            "search_term": self.search_term,
            "searching": self.is_searching,
            "results": [row.model_dump(mode="json", exclude_none=True) for row in self.results],
            "new_client_mode": self.new_client_mode,
            "new_client": dict(self.new_client),
            "tipos_identificacion": dict(TIPOS_IDENTIFICACION),
            "error": self.error_message,
        }
