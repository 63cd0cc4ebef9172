from __future__ import annotations

from dataclasses import dataclass, field

import requests
from requests.adapters import HTTPAdapter

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.clientes import ClientesClient
from .clients.guias import GuiasClient
from .clients.inventario import InventarioClient
from .clients.productos import ProductosClient
from .clients.sucursales import SucursalesClient
from .clients.turnos import TurnosClient
from .clients.ventas import VentasClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import SessionData, UserResponse


@dataclass
class ApiSession:
    """Cookie-authenticated session shared by every API-area client."""

    config: ClientConfig
    auth_store: AuthStore | None = None
    http_session: requests.Session | None = None
    user: UserResponse | None = None
    http: HttpClient | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        if self.http_session is None:
            self.http_session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.http_session.mount("http://", adapter)
            self.http_session.mount("https://", adapter)
        if self.http is None:
            self.http = HttpClient(config=self.config, session=self.http_session)
        stored = self.auth_store.load()
        if stored and stored.tenant == self.config.tenant:
            self.http_session.cookies.update(stored.cookies)
            self.user = stored.user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _http(self) -> HttpClient:
        return self.http

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http())

    def turnos_client(self) -> TurnosClient:
        return TurnosClient(http=self._http())

    def productos_client(self) -> ProductosClient:
        return ProductosClient(http=self._http())

    def clientes_client(self) -> ClientesClient:
        return ClientesClient(http=self._http())

    def sucursales_client(self) -> SucursalesClient:
        return SucursalesClient(http=self._http())

    def inventario_client(self) -> InventarioClient:
        return InventarioClient(http=self._http())

    def ventas_client(self) -> VentasClient:
        return VentasClient(http=self._http())

    def guias_client(self) -> GuiasClient:
        return GuiasClient(http=self._http())

    def establish(self, user: UserResponse | None) -> None:
        self.user = user
        self.auth_store.save(
            SessionData(
                cookies=self.http_session.cookies.get_dict(),
                tenant=self.config.tenant,
                env_name=self.config.env_name,
                user=user,
            )
        )

    def clear(self) -> None:
        self.user = None
        if self.http_session is not None:
            self.http_session.cookies.clear()
        if self.http is not None:
            self.http.clear_cache()
        if self.auth_store:
            self.auth_store.clear()
