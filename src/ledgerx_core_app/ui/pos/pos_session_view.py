from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from time import perf_counter
from typing import Any, Mapping

from ledgerx_client_sdk import (
    CierreTurnoRequest,
    Cliente,
    FacturaPosItem,
    FacturaPosPago,
    FacturaPosRequest,
    Producto,
    SucursalSimple,
    unwrap_cliente,
)

from ledgerx_core_app.services.pos_sales_service import PosSalesService, PosSalesServiceError
from ledgerx_core_app.services.turnos_service import TurnosService, TurnosServiceError
from ledgerx_core_app.shared.telemetry.events import build_event
from ledgerx_core_app.shared.telemetry.logger import TelemetryLogger
from ledgerx_core_app.ui.pos import session_state as pos
from ledgerx_core_app.ui.pos.components.cart_table import CartTable
from ledgerx_core_app.ui.pos.components.shift_status_chip import ShiftStatusChip
from ledgerx_core_app.ui.pos.components.totals_bar import TotalsBar
from ledgerx_core_app.ui.pos.customer_dialog import CustomerDialog
from ledgerx_core_app.ui.pos.keyboard import KEY_CHECKOUT, KEY_CUSTOMER, KEY_FOCUS_SEARCH, KeyboardBindings
from ledgerx_core_app.ui.pos.shift_close_dialog import CONFIRM_PROMPT as DIALOG_CONFIRM_PROMPT
from ledgerx_core_app.ui.pos.shift_close_dialog import ShiftCloseDialog
from ledgerx_core_app.ui.shared.notification_center import NotificationCenter
from ledgerx_core_app.ui.shared.request_sequencer import RequestSequencer
from ledgerx_core_app.ui.shared.view_state import resolve_state

logger = logging.getLogger(__name__)

CLOSE_SHIFT_PROMPT = "¿Está seguro de cerrar el turno actual? Se generará el corte de caja."
NO_SHIFT_MESSAGE = "Debe abrir un turno para registrar ventas"


@dataclass
class PosSessionView:
    service: PosSalesService
    shift_service: TurnosService
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="core_app", enabled=False))
    state: pos.PosSessionState = field(default_factory=pos.PosSessionState)
    sucursales: list[SucursalSimple] = field(default_factory=list)
    selected_sucursal: int | None = None
    productos: list[Producto] = field(default_factory=list)
    search_term: str = ""
    show_shift_dialog: bool = False
    close_dialog: ShiftCloseDialog | None = None
    search_focused: bool = False
    mounted: bool = False
    is_checking_shift: bool = False
    is_loading_products: bool = False
    is_submitting: bool = False
    error_message: str | None = None
    last_sale: dict[str, Any] | None = None
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    customer_dialog: CustomerDialog | None = None
    keyboard: KeyboardBindings = field(default_factory=KeyboardBindings)
    _shift_requests: RequestSequencer = field(default_factory=RequestSequencer, repr=False)
    _product_requests: RequestSequencer = field(default_factory=RequestSequencer, repr=False)
    _cart_lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def __post_init__(self) -> None:
        if self.customer_dialog is None:
            self.customer_dialog = CustomerDialog(service=self.service)
        self.keyboard.bind(KEY_CUSTOMER, self.open_customer_dialog)
        self.keyboard.bind(KEY_CHECKOUT, self.checkout)
        self.keyboard.bind(KEY_FOCUS_SEARCH, self.focus_search)

    # lifecycle

    def mount(self) -> dict[str, Any]:
        self.mounted = True
        self.keyboard.activate()
        self._emit("navigation", "screen_view", "pos.mount", success=True)
        return self.check_active_shift()

    def unmount(self) -> None:
        self.mounted = False
        self.keyboard.deactivate()
        self._shift_requests.invalidate()
        self._product_requests.invalidate()

    def handle_key(self, key: str, *, composing: bool = False) -> dict[str, Any]:
        return self.keyboard.dispatch(key, composing=composing)

    # shift

    def check_active_shift(self) -> dict[str, Any]:
        token = self._shift_requests.issue()
        self.is_checking_shift = True
        try:
            status = self.shift_service.active_shift()
        except TurnosServiceError as exc:
            if self._shift_requests.is_current(token):
                self.error_message = exc.message
                self.is_checking_shift = False
            logger.warning("shift_check_failed", extra={"error": exc.message, "status": exc.status})
            return {"ok": False, "error": exc.message}
        if not self._shift_requests.is_current(token):
            return {"ok": False, "stale": True}
        self.is_checking_shift = False
        self.error_message = None

        if status.activo and status.turno is not None:
            with self._cart_lock:
                self.state = pos.open_shift(self.state, status.turno)
            self.selected_sucursal = status.turno.sucursal
            self.show_shift_dialog = False
            self.load_products("", status.turno.sucursal)
            return {"ok": True, "phase": self.state.phase.value, "turno": status.turno.model_dump(mode="json")}

        with self._cart_lock:
            if self.state.turno is not None:
                self.state = pos.close_shift(self.state)
        self.load_branches()
        self.show_shift_dialog = True
        return {"ok": True, "phase": self.state.phase.value, "turno": None}

    def load_branches(self) -> bool:
        try:
            self.sucursales = self.shift_service.branches()
        except TurnosServiceError as exc:
            logger.warning("branch_list_failed", extra={"error": exc.message})
            return False
        if self.sucursales:
            self.selected_sucursal = self.sucursales[0].id
        return True

    def select_branch(self, sucursal_id: int | None) -> None:
        self.selected_sucursal = sucursal_id

    def open_shift(self, sucursal_id: int | None = None) -> dict[str, Any]:
        branch = sucursal_id if sucursal_id is not None else self.selected_sucursal
        if self.is_submitting:
            return {"ok": False, "error": "Operación en proceso"}
        self.is_submitting = True
        started = perf_counter()
        try:
            turno = self.shift_service.open_shift(branch)
        except TurnosServiceError as exc:
            self._alert(exc.message, title="Error al abrir turno")
            self._emit("pos", "shift_open_result", "pos.open_shift", success=False, started=started, error_code=exc.error_type)
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False
        with self._cart_lock:
            self.state = pos.open_shift(self.state, turno)
        self.selected_sucursal = turno.sucursal
        self.show_shift_dialog = False
        self.error_message = None
        self._emit("pos", "shift_open_result", "pos.open_shift", success=True, started=started)
        self.load_products("", turno.sucursal)
        return {"ok": True, "turno": turno.model_dump(mode="json")}

    def begin_close_shift(self, expected: Mapping[str, Decimal] | None = None) -> dict[str, Any]:
        if not self.state.has_shift:
            return {"ok": False, "error": "No hay un turno activo"}
        self.close_dialog = ShiftCloseDialog(expected=dict(expected) if expected else None)
        return {"ok": True, "dialog": self.close_dialog.render()}

    def cancel_close_shift(self) -> None:
        self.close_dialog = None

    def close_shift(
        self,
        *,
        confirmed: bool = False,
        declaration: CierreTurnoRequest | Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        if not self.state.has_shift:
            return {"ok": False, "error": "No hay un turno activo"}
        reconciled = declaration is not None or self.close_dialog is not None
        if not confirmed:
            return {
                "ok": False,
                "needs_confirmation": True,
                "prompt": DIALOG_CONFIRM_PROMPT if reconciled else CLOSE_SHIFT_PROMPT,
            }
        if self.is_submitting:
            return {"ok": False, "error": "Operación en proceso"}

        if isinstance(declaration, CierreTurnoRequest):
            request = declaration
        elif declaration is not None or self.close_dialog is not None:
            dialog = self.close_dialog or ShiftCloseDialog()
            if declaration is not None:
                dialog.update(dict(declaration))
            if not dialog.validate():
                return {"ok": False, "error": "Valores de cierre inválidos", "field_errors": dict(dialog.field_errors)}
            request = dialog.to_request()
        else:
            cart_total = pos.totals(self.state).total
            logger.warning(
                "shift_close_without_reconciliation",
                extra={"turno_id": self.state.turno.id if self.state.turno else None, "efectivo_total": str(cart_total)},
            )
            request = CierreTurnoRequest(efectivo_total=float(cart_total))

        self.is_submitting = True
        started = perf_counter()
        try:
            self.shift_service.close_shift(request)
        except TurnosServiceError as exc:
            self._alert(exc.message, title="Error al cerrar turno")
            self._emit("pos", "shift_close_result", "pos.close_shift", success=False, started=started, error_code=exc.error_type)
            return {"ok": False, "error": exc.message}
        finally:
            self.is_submitting = False

        with self._cart_lock:
            self.state = pos.close_shift(self.state)
        self.close_dialog = None
        self.customer_dialog.close()
        self.productos = []
        self._product_requests.invalidate()
        self._emit("pos", "shift_close_result", "pos.close_shift", success=True, started=started)
        self.load_branches()
        self.show_shift_dialog = True
        return {"ok": True, "declaration": request.model_dump(mode="json", exclude_none=True)}

    # catalogue

    def load_products(self, search: str | None = None, sucursal: int | None = None) -> bool:
        term = self.search_term if search is None else search
        target = sucursal or (self.state.turno.sucursal if self.state.turno else None)
        token = self._product_requests.issue()
        self.is_loading_products = True
        try:
            found = self.service.products(search=term, sucursal=target)
        except PosSalesServiceError as exc:
            logger.warning("product_list_failed", extra={"error": exc.message, "sucursal": target})
            if self._product_requests.is_current(token):
                self.is_loading_products = False
            return False
        if not self._product_requests.is_current(token):
            logger.debug("product_list_stale", extra={"token": token})
            return False
        self.productos = found
        self.is_loading_products = False
        return True

    def set_search_term(self, term: str) -> bool:
        self.search_term = term
        return self.load_products(term)

    def focus_search(self) -> dict[str, Any]:
        self.search_focused = True
        return {"ok": True, "focus": "search"}

    # cart

    def add_to_cart(self, producto: Producto | Mapping[str, Any]) -> dict[str, Any]:
        item = producto if isinstance(producto, Producto) else Producto.model_validate(producto)
        if not self.state.has_shift:
            self._alert(NO_SHIFT_MESSAGE)
            return {"ok": False, "error": NO_SHIFT_MESSAGE}
        if (item.stock or 0) <= 0:
            self._alert(pos.OUT_OF_STOCK_MESSAGE)
            return {"ok": False, "error": pos.OUT_OF_STOCK_MESSAGE}
        try:
            presentacion = self.service.first_presentation(item.id)
        except PosSalesServiceError as exc:
            logger.warning("presentation_lookup_failed", extra={"producto_id": item.id, "error": exc.message})
            self._alert(exc.message)
            return {"ok": False, "error": exc.message}
        if presentacion is None:
            self._alert(pos.NO_PRESENTATION_MESSAGE)
            return {"ok": False, "error": pos.NO_PRESENTATION_MESSAGE}
        # the lookup may have interleaved with other adds; apply against the latest cart
        with self._cart_lock:
            try:
                self.state = pos.add_item(self.state, item, presentacion)
            except pos.CartRejected as exc:
                self._alert(str(exc))
                return {"ok": False, "error": str(exc)}
            cart = CartTable(self.state.cart).render()
        return {"ok": True, "cart": cart}

    def remove_from_cart(self, index: int) -> dict[str, Any]:
        with self._cart_lock:
            self.state = pos.remove_item(self.state, index)
            return {"ok": True, "cart": CartTable(self.state.cart).render()}

    # customer

    def open_customer_dialog(self) -> dict[str, Any]:
        self.customer_dialog.open()
        return {"ok": True, "dialog": "customer"}

    def search_clients(self, term: str) -> dict[str, Any]:
        return self.customer_dialog.search(term)

    def select_client(self, record: Cliente | Mapping[str, Any]) -> dict[str, Any]:
        try:
            cliente = record if isinstance(record, Cliente) else Cliente.model_validate(unwrap_cliente(dict(record)))
        except ValueError as exc:
            self.customer_dialog.error_message = str(exc)
            return {"ok": False, "error": str(exc)}
        with self._cart_lock:
            self.state = pos.select_customer(self.state, cliente)
        self.customer_dialog.close()
        return {"ok": True, "cliente": cliente.model_dump(mode="json", exclude_none=True)}

    def create_client(self, data: Mapping[str, Any]) -> dict[str, Any]:
        outcome = self.customer_dialog.create(dict(data))
        if not outcome["ok"]:
            return outcome
        return self.select_client(outcome["cliente"])

    # checkout

    def checkout(self) -> dict[str, Any]:
        if not self.state.cart:
            return {"ok": False, "empty": True, "error": None}
        if not self.state.has_shift:
            self._alert(NO_SHIFT_MESSAGE)
            return {"ok": False, "error": NO_SHIFT_MESSAGE}
        if self.is_submitting:
            return {"ok": False, "error": "Venta en proceso"}
        if pos.requires_customer_data(self.state):
            self._alert(pos.CUSTOMER_REQUIRED_MESSAGE, level="warning")
            self.customer_dialog.open()
            return {"ok": False, "customer_required": True, "error": pos.CUSTOMER_REQUIRED_MESSAGE}

        with self._cart_lock:
            snapshot = self.state
            self.state = pos.begin_checkout(self.state)
        request = FacturaPosRequest(
            cliente=snapshot.customer,
            items=[
                FacturaPosItem(
                    id=line.producto_id,
                    presentacion_id=line.presentacion_id,
                    cantidad=line.cantidad,
                    precio=float(line.precio),
                )
                for line in snapshot.cart
            ],
            pago=FacturaPosPago(total=float(pos.totals(snapshot).total)),
        )
        self.is_submitting = True
        started = perf_counter()
        try:
            response = self.service.checkout(request)
        except PosSalesServiceError as exc:
            with self._cart_lock:
                self.state = pos.finish_checkout(self.state, success=False)
            self._alert(exc.message, title="Error al procesar venta")
            self._emit("pos", "checkout_result", "pos.checkout", success=False, started=started, error_code=exc.error_type)
            return {"ok": False, "error": exc.message, "details": exc.details}
        finally:
            self.is_submitting = False

        with self._cart_lock:
            self.state = pos.finish_checkout(self.state, success=True)
        self.last_sale = {
            "estado_sri": response.estado_sri,
            "estado_display": response.estado_display,
            "clave_acceso": response.clave_acceso,
        }
        message = (
            "Venta registrada.\n"
            f"Factura Electrónica: {response.estado_display}\n"
            f"Clave Acceso: {response.clave_acceso}"
        )
        self.notifications.push(level="success", title="Venta registrada", message=message)
        self._emit("pos", "checkout_result", "pos.checkout", success=True, started=started, context={"items": len(request.items)})
        self.load_products(self.search_term)
        return {"ok": True, "message": message, **self.last_sale}

    # rendering

    def render(self) -> dict[str, Any]:
        current = self.state
        view_state = resolve_state(
            is_loading=self.is_checking_shift or self.is_loading_products,
            error=self.error_message,
            has_data=bool(self.productos),
        )
        return {
            "phase": current.phase.value,
            "shift": ShiftStatusChip(current.turno).render(),
            "cart": CartTable(current.cart).render(),
            "totals": TotalsBar(pos.totals(current), current.customer.is_consumidor_final).render(),
            "customer": current.customer.model_dump(mode="json", exclude_none=True),
            "productos": [row.model_dump(mode="json", exclude_none=True) for row in self.productos],
            "sucursales": [row.model_dump(mode="json", exclude_none=True) for row in self.sucursales],
            "selected_sucursal": self.selected_sucursal,
            "search_term": self.search_term,
            "search_focused": self.search_focused,
            "shift_dialog_open": self.show_shift_dialog,
            "close_dialog": self.close_dialog.render() if self.close_dialog else None,
            "customer_dialog": self.customer_dialog.render(),
            "submitting": self.is_submitting,
            "last_sale": self.last_sale,
            "error": self.error_message,
            "view_state": view_state.render(),
            "notifications": self.notifications.render(),
        }

    def _alert(self, message: str, *, title: str = "Punto de venta", level: str = "error") -> None:
        self.notifications.push(level=level, title=title, message=message)

    def _emit(
        self,
        category: str,
        name: str,
        action: str,
        *,
        success: bool,
        started: float | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        duration_ms = int((perf_counter() - started) * 1000) if started is not None else None
        self.telemetry.emit(
            build_event(
                category=category,
                name=name,
                module="pos",
                action=action,
                success=success,
                duration_ms=duration_ms,
                error_code=error_code,
                context=context,
            )
        )
