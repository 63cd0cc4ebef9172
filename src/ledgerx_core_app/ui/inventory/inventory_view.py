from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO

from ledgerx_client_sdk import (
    InventarioAgrupadoResponse,
    InventarioDetalleResponse,
    InventarioDetalleRow,
    Producto,
    Sucursal,
    validate_adjustment_payload,
    validate_import_payload,
    validate_transfer_payload,
)
from ledgerx_client_sdk.models_inventario import MODE_AGRUPADO, MODE_DETALLE

from ledgerx_core_app.services.inventario_service import InventarioService, InventarioServiceError
from ledgerx_core_app.shared.telemetry.events import build_event
from ledgerx_core_app.shared.telemetry.logger import TelemetryLogger
from ledgerx_core_app.ui.inventory.adjustment_dialog import AdjustmentDialog
from ledgerx_core_app.ui.inventory.components.inventory_table import InventoryTable
from ledgerx_core_app.ui.inventory.import_dialog import ImportDialog
from ledgerx_core_app.ui.inventory.transfer_dialog import TransferDialog
from ledgerx_core_app.ui.inventory.workflow import WorkflowDialog
from ledgerx_core_app.ui.shared.notification_center import NotificationCenter
from ledgerx_core_app.ui.shared.request_sequencer import RequestSequencer
from ledgerx_core_app.ui.shared.view_state import resolve_state

logger = logging.getLogger(__name__)

ADJUSTMENT_SUCCESS = "Ajuste realizado correctamente"
TRANSFER_SUCCESS = "Transferencia realizada correctamente"
UNSUPPORTED_FILE_MESSAGE = "Formato de archivo no soportado (.xlsx, .xls, .csv)"


@dataclass
class InventoryView:
    service: InventarioService
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="core_app", enabled=False))
    selected_sucursal: int | None = None
    search_term: str = ""
    response: InventarioDetalleResponse | InventarioAgrupadoResponse | None = None
    sucursales: list[Sucursal] = field(default_factory=list)
    productos: list[Producto] = field(default_factory=list)
    expanded: set[int] = field(default_factory=set)
    last_query: dict[str, Any] = field(default_factory=dict)
    is_loading: bool = False
    error_message: str | None = None
    success_message: str | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    adjustment: AdjustmentDialog = field(default_factory=AdjustmentDialog)
    transfer: TransferDialog = field(default_factory=TransferDialog)
    importer: ImportDialog = field(default_factory=ImportDialog)
    _requests: RequestSequencer = field(default_factory=RequestSequencer, repr=False)

    @property
    def mode(self) -> str | None:
        return self.response.mode if self.response is not None else None

    def unmount(self) -> None:
        self._requests.invalidate()

    # read path

    def load_data(self) -> bool:
        agrupado = not self.selected_sucursal
        query = {"sucursal": self.selected_sucursal, "search": self.search_term, "agrupado": agrupado}
        self.last_query = query
        token = self._requests.issue()
        self.is_loading = True
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="inventario") as pool:
            inventory_future = pool.submit(
                self.service.inventory,
                sucursal=self.selected_sucursal,
                search=self.search_term,
                agrupado=agrupado,
            )
            branches_future = pool.submit(self.service.branches)
            products_future = pool.submit(self.service.products)
            try:
                response = inventory_future.result()
            except InventarioServiceError as exc:
                if self._requests.is_current(token):
                    self.error_message = exc.message or "Error cargando datos"
                    self.is_loading = False
                self._emit("api_call_result", "inventory.load", success=False, error_code=exc.error_type)
                return False
            branches = self._dropdown(branches_future, "branches")
            products = self._dropdown(products_future, "products")

        if not self._requests.is_current(token):
            logger.debug("inventory_load_stale", extra={"token": token})
            return False
        self.response = response
        if branches is not None:
            self.sucursales = branches
        if products is not None:
            self.productos = products
        self.error_message = None
        self.is_loading = False
        self._emit("navigation", "inventory.load", success=True, context={"mode": response.mode, "rows": len(response.results)})
        return True

    @staticmethod
    def _dropdown(future, label: str) -> list | None:
        try:
            return future.result()
        except InventarioServiceError as exc:
            logger.warning("inventory_dropdown_failed", extra={"list": label, "error": exc.message})
            return None

    def set_branch_filter(self, sucursal_id: int | None) -> bool:
        self.selected_sucursal = sucursal_id or None
        return self.load_data()

    def set_search(self, term: str) -> bool:
        self.search_term = term
        return self.load_data()

    def toggle_expand(self, row_id: int) -> bool:
        if row_id in self.expanded:
            self.expanded.discard(row_id)
            return False
        self.expanded.add(row_id)
        return True

    def detail_row(self, row_id: int) -> InventarioDetalleRow | None:
        if not isinstance(self.response, InventarioDetalleResponse):
            return None
        return next((row for row in self.response.results if row.id == row_id), None)

    # adjustment

    def open_adjustment(self, row_id: int | None = None) -> dict[str, Any]:
        row = None
        if row_id is not None:
            if self.mode != MODE_DETALLE:
                return {"ok": False, "error": "Seleccione una sucursal para ajustar el stock"}
            row = self.detail_row(row_id)
            if row is None:
                return {"ok": False, "error": "Registro de inventario no encontrado"}
        self.adjustment.prefill(row, self.productos, self.sucursales)
        return {"ok": True, "dialog": self.adjustment.render()}

    def submit_adjustment(self, **values: Any) -> dict[str, Any]:
        return self._submit(
            self.adjustment,
            values,
            validate=validate_adjustment_payload,
            action="inventory.adjust",
            send=lambda: self.service.adjust(self.adjustment.to_request()),
            success_message=ADJUSTMENT_SUCCESS,
        )

    # transfer

    def open_transfer(self) -> dict[str, Any]:
        self.transfer.prefill()
        return {"ok": True, "dialog": self.transfer.render()}

    def submit_transfer(self, **values: Any) -> dict[str, Any]:
        return self._submit(
            self.transfer,
            values,
            validate=validate_transfer_payload,
            action="inventory.transfer",
            send=lambda: self.service.transfer(self.transfer.to_request()),
            success_message=TRANSFER_SUCCESS,
        )

    # bulk import

    def open_import(self) -> dict[str, Any]:
        self.importer.prefill(self.selected_sucursal, self.sucursales)
        return {"ok": True, "dialog": self.importer.render()}

    def submit_import(self, file: str | Path | BinaryIO | None = None, sucursal_id: int | None = None) -> dict[str, Any]:
        if not self.importer.is_open:
            return {"ok": False, "error": "El formulario no está abierto"}
        if file is not None:
            self.importer.update(file=file)
        if sucursal_id is not None:
            self.importer.update(sucursal_id=sucursal_id)
        check = validate_import_payload(file_name=self.importer.file_name, sucursal_id=self.importer.values.get("sucursal_id"))
        if not check.ok:
            self.importer.fail(check.summary or "Datos incompletos", {issue.field: issue.reason for issue in check.issues})
            return {"ok": False, "error": self.importer.error_message, "field_errors": dict(self.importer.field_errors)}
        if not self.importer.has_supported_extension():
            self.importer.fail(UNSUPPORTED_FILE_MESSAGE, {"file": UNSUPPORTED_FILE_MESSAGE})
            return {"ok": False, "error": UNSUPPORTED_FILE_MESSAGE}
        if self.importer.is_submitting:
            return {"ok": False, "error": "Carga en proceso"}
        self.importer.begin_submit()
        try:
            result = self.service.bulk_import(self.importer.values["file"], int(self.importer.values["sucursal_id"]))
        except InventarioServiceError as exc:
            self.importer.fail(exc.message or "Error en carga masiva")
            self._emit("api_call_result", "inventory.import", success=False, error_code=exc.error_type)
            return {"ok": False, "error": self.importer.error_message}
        if not result.success:
            self.importer.fail(result.error_summary)
            self._emit("inventory", "inventory.import", success=False, error_code="rejected", context={"errors": len(result.errors)})
            return {"ok": False, "error": result.error_summary, "errors": list(result.errors)}
        self.importer.close()
        self._succeed(result.message or "Carga masiva completada", "inventory.import")
        return {"ok": True, "message": self.success_message}

    def download_template(self, destination: str | Path | None = None) -> dict[str, Any]:
        try:
            path = self.service.download_template(destination)
        except InventarioServiceError as exc:
            self.error_message = exc.message
            return {"ok": False, "error": exc.message}
        return {"ok": True, "path": str(path)}

    # shared mutation flow

    def _submit(self, dialog: WorkflowDialog, values: dict[str, Any], *, validate, action: str, send, success_message: str) -> dict[str, Any]:
        if not dialog.is_open:
            return {"ok": False, "error": "El formulario no está abierto"}
        if dialog.is_submitting:
            return {"ok": False, "error": "Operación en proceso"}
        if values:
            dialog.update(**values)
        check = validate(dialog.values)
        if not check.ok:
            dialog.fail(check.summary or "Datos incompletos", {issue.field: issue.reason for issue in check.issues})
            self._emit("error", action, success=False, error_code="validation", context={"field_count": len(check.issues)})
            return {"ok": False, "error": dialog.error_message, "field_errors": dict(dialog.field_errors)}
        dialog.begin_submit()
        try:
            send()
        except InventarioServiceError as exc:
            dialog.fail(exc.message)
            self._emit("api_call_result", action, success=False, error_code=exc.error_type)
            return {"ok": False, "error": exc.message, "details": exc.details}
        except ValueError as exc:
            dialog.fail(str(exc))
            return {"ok": False, "error": str(exc)}
        dialog.close()
        self._succeed(success_message, action)
        return {"ok": True, "message": success_message}

    def _succeed(self, message: str, action: str) -> None:
        self.success_message = message
        self.notifications.push(level="success", title="Inventario", message=message)
        self._emit("inventory", action, success=True)
        self.load_data()

    # rendering

    def render(self) -> dict[str, Any]:
        table = InventoryTable(self.response, self.expanded).render()
        state = resolve_state(is_loading=self.is_loading, error=self.error_message, has_data=bool(table["rows"]))
        return {
            "mode": self.mode,
            "grouped": self.mode == MODE_AGRUPADO,
            "filters": {"sucursal": self.selected_sucursal, "search": self.search_term},
            "last_query": dict(self.last_query),
            "table": table,
            "sucursales": [row.model_dump(mode="json", exclude_none=True) for row in self.sucursales],
            "productos": [row.model_dump(mode="json", exclude_none=True) for row in self.productos],
            "dialogs": {
                "adjustment": self.adjustment.render(),
                "transfer": self.transfer.render(),
                "import": self.importer.render(),
            },
            "loading": self.is_loading,
            "error": self.error_message,
            "success": self.success_message,
            "view_state": state.render(),
            "notifications": self.notifications.render(),
        }

    def _emit(
        self,
        category: str,
        action: str,
        *,
        success: bool,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.telemetry.emit(
            build_event(
                category=category,
                name="inventory_event",
                module="inventory",
                action=action,
                success=success,
                error_code=error_code,
                context=context,
            )
        )
