from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from ledgerx_client_sdk import ApiSession, ClientConfig, load_config, to_user_facing_error
from ledgerx_client_sdk.exceptions import ApiError

from ledgerx_core_app.app.state import AppState, Route
from ledgerx_core_app.config import CoreAppConfig, load_core_app_config
from ledgerx_core_app.services.auth_service import AuthService
from ledgerx_core_app.services.historial_service import HistorialService
from ledgerx_core_app.services.inventario_service import InventarioService
from ledgerx_core_app.services.pos_sales_service import PosSalesService
from ledgerx_core_app.services.turnos_service import TurnosService
from ledgerx_core_app.shared.telemetry.events import build_event
from ledgerx_core_app.shared.telemetry.logger import TelemetryLogger
from ledgerx_core_app.ui.history.guides_history_view import GuidesHistoryView
from ledgerx_core_app.ui.history.sales_history_view import SalesHistoryView
from ledgerx_core_app.ui.history.shift_history_view import ShiftHistoryView
from ledgerx_core_app.ui.inventory.inventory_view import InventoryView
from ledgerx_core_app.ui.pos.pos_session_view import PosSessionView
from ledgerx_core_app.ui.shared.error_presenter import ErrorPresenter

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class CoreAppBootstrap:
    def __init__(
        self,
        config: ClientConfig | None = None,
        session: ApiSession | None = None,
        app_config: CoreAppConfig | None = None,
    ) -> None:
        self.config = config or load_config()
        self.app_config = app_config or load_core_app_config()
        self.session = session or ApiSession(self.config)
        self.state = AppState()
        self.auth_service = AuthService(self.session)
        self.turnos_service = TurnosService(self.session)
        self.pos_service = PosSalesService(self.session)
        self.inventario_service = InventarioService(self.session)
        self.historial_service = HistorialService(self.session)
        self.telemetry = TelemetryLogger(app_name="core_app", enabled=self.app_config.telemetry_enabled)
        self.error_presenter = ErrorPresenter()

    def start(self) -> BootstrapResult:
        if not self.auth_service.has_active_session():
            self._navigate(Route.LOGIN, "Inicie sesión")
            return BootstrapResult(route=self.state.route)
        try:
            user = self.auth_service.refresh_user()
        except ApiError as exc:
            logger.warning("session_restore_failed", extra={"status": exc.status})
            self.session.clear()
            self._record_error(exc, action="session_restore")
            self._navigate(Route.LOGIN, "Sesión expirada")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        if user is None:
            self._navigate(Route.LOGIN, "Inicie sesión")
            return BootstrapResult(route=self.state.route)
        return self._enter_app(user)

    def login(self, username: str, password: str) -> BootstrapResult:
        started = perf_counter()
        try:
            user = self.auth_service.login(username, password)
        except Exception as exc:
            self._record_error(exc, action="login")
            self._emit_auth_result(False, duration_ms=int((perf_counter() - started) * 1000))
            self._navigate(Route.LOGIN, "Autenticación fallida")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        self._emit_auth_result(True, duration_ms=int((perf_counter() - started) * 1000))
        return self._enter_app(user)

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.state.session.user = None
        self.state.session.tenant = None
        self.state.session.sucursal_id = None
        self._navigate(Route.LOGIN, "Sesión cerrada")
        return BootstrapResult(route=self.state.route)

    def navigate(self, route: Route) -> BootstrapResult:
        if route is not Route.LOGIN and self.state.session.user is None:
            self._navigate(Route.LOGIN, "Inicie sesión")
            return BootstrapResult(route=self.state.route, error_message="Sesión requerida")
        self._navigate(route, route.value)
        self._emit_screen_view(route.value)
        return BootstrapResult(route=self.state.route)

    # view factories

    def pos_view(self) -> PosSessionView:
        return PosSessionView(service=self.pos_service, shift_service=self.turnos_service, telemetry=self.telemetry)

    def inventory_view(self) -> InventoryView:
        return InventoryView(service=self.inventario_service, telemetry=self.telemetry)

    def sales_history_view(self) -> SalesHistoryView:
        return SalesHistoryView(
            service=self.historial_service,
            telemetry=self.telemetry,
            poll_interval_seconds=self.app_config.poll_interval_seconds,
        )

    def guides_history_view(self) -> GuidesHistoryView:
        return GuidesHistoryView(
            service=self.historial_service,
            telemetry=self.telemetry,
            poll_interval_seconds=self.app_config.poll_interval_seconds,
        )

    def shift_history_view(self) -> ShiftHistoryView:
        return ShiftHistoryView(service=self.turnos_service)

    def _enter_app(self, user) -> BootstrapResult:
        self.state.session.user = user
        self.state.session.tenant = self.config.tenant
        self.state.error_message = None
        self.state.last_error = None
        self._navigate(Route.POS, "Autenticado")
        self._emit_screen_view(Route.POS.value)
        logger.info("app_ready", extra={"tenant": self.config.tenant, "user_id": user.id})
        return BootstrapResult(route=self.state.route)

    def _record_error(self, exc: Exception, *, action: str) -> None:
        self.state.error_message = self._friendly_error(exc)
        self.state.last_error = self.error_presenter.present(
            message=self.state.error_message,
            details=getattr(exc, "details", None),
            status=getattr(exc, "status", None),
            action=action,
            allow_retry=True,
        )

    @staticmethod
    def _friendly_error(exc: Exception) -> str:
        if isinstance(exc, ApiError):
            return to_user_facing_error(exc).message
        return str(exc) or "Error inesperado del cliente"

    def _emit_auth_result(self, success: bool, *, duration_ms: int) -> None:
        self.telemetry.emit(
            build_event(
                category="auth",
                name="auth_login_result",
                module="auth",
                action="login",
                success=success,
                duration_ms=duration_ms,
            )
        )

    def _emit_screen_view(self, action: str) -> None:
        self.telemetry.emit(
            build_event(
                category="navigation",
                name="screen_view",
                module="core_app",
                action=action,
                success=True,
            )
        )

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message
