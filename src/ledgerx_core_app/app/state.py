from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ledgerx_client_sdk.models import UserResponse

from ledgerx_core_app.ui.shared.error_presenter import PresentedError


class Route(str, Enum):
    LOGIN = "login"
    POS = "pos"
    INVENTORY = "inventory"
    HISTORY = "history"


@dataclass
class SessionContext:
    user: UserResponse | None = None
    tenant: str | None = None
    sucursal_id: int | None = None


@dataclass
class AppState:
    route: Route = Route.LOGIN
    error_message: str | None = None
    status_message: str = "Listo"
    last_error: PresentedError | None = None
    session: SessionContext = field(default_factory=SessionContext)
