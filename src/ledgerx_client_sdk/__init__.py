from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.clientes import ClientesClient
from .clients.guias import GuiasClient
from .clients.inventario import InventarioClient
from .clients.productos import ProductosClient
from .clients.sucursales import SucursalesClient
from .clients.turnos import TurnosClient
from .clients.ventas import VentasClient
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    InsufficientStockError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ShiftAlreadyOpenError,
    ShiftNotOpenError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .inventory_validation import (
    InventoryValidationIssue,
    InventoryValidationResult,
    validate_adjustment_payload,
    validate_import_payload,
    validate_transfer_payload,
)
from .models import LoginResponse, MutationResponse, SessionData, UserResponse
from .models_clientes import (
    CONSUMIDOR_FINAL_ID,
    CONSUMIDOR_FINAL_NOMBRE,
    Cliente,
    ClienteCreateRequest,
    ClientesListResponse,
    consumidor_final,
    unwrap_cliente,
)
from .models_inventario import (
    MODE_AGRUPADO,
    MODE_DETALLE,
    AjusteRequest,
    CargaMasivaResponse,
    DesgloseSucursal,
    InventarioAgrupadoResponse,
    InventarioAgrupadoRow,
    InventarioDetalleResponse,
    InventarioDetalleRow,
    InventarioQuery,
    TransferenciaRequest,
    Transportista,
    parse_inventario_response,
)
from .models_productos import Presentacion, PresentacionesResponse, Producto, ProductosListResponse, ProductQuery
from .models_sucursales import Sucursal, SucursalesListResponse, SucursalesUsuarioResponse, SucursalSimple
from .models_turnos import (
    CierreTurnoRequest,
    Turno,
    TurnoHistorico,
    TurnoHistoricoQuery,
    TurnosHistoricoResponse,
    TurnoStatus,
)
from .models_ventas import (
    SRI_PROCESSING,
    FacturaPosItem,
    FacturaPosPago,
    FacturaPosRequest,
    FacturaPosResponse,
    Factura,
    FacturasQuery,
    FacturasResponse,
    Guia,
    GuiasQuery,
    GuiasResponse,
    sri_status_label,
)
from .pos_validation import (
    PosValidationIssue,
    PosValidationResult,
    validate_new_client_payload,
    validate_open_shift_payload,
)
from .session import ApiSession
from .tenant import PUBLIC_TENANT, resolve_tenant, tenant_headers
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "ApiError",
    "ApiSession",
    "AjusteRequest",
    "AuthClient",
    "AuthError",
    "AuthStore",
    "CONSUMIDOR_FINAL_ID",
    "CONSUMIDOR_FINAL_NOMBRE",
    "CargaMasivaResponse",
    "CierreTurnoRequest",
    "Cliente",
    "ClienteCreateRequest",
    "ClientesClient",
    "ClientesListResponse",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "DesgloseSucursal",
    "Factura",
    "FacturaPosItem",
    "FacturaPosPago",
    "FacturaPosRequest",
    "FacturaPosResponse",
    "FacturasQuery",
    "FacturasResponse",
    "ForbiddenError",
    "Guia",
    "GuiasClient",
    "GuiasQuery",
    "GuiasResponse",
    "HttpClient",
    "InsufficientStockError",
    "InventarioAgrupadoResponse",
    "InventarioAgrupadoRow",
    "InventarioClient",
    "InventarioDetalleResponse",
    "InventarioDetalleRow",
    "InventarioQuery",
    "InventoryValidationIssue",
    "InventoryValidationResult",
    "LoginResponse",
    "MODE_AGRUPADO",
    "MODE_DETALLE",
    "MutationResponse",
    "NotFoundError",
    "PUBLIC_TENANT",
    "PermissionError",
    "PosValidationIssue",
    "PosValidationResult",
    "Presentacion",
    "PresentacionesResponse",
    "ProductQuery",
    "Producto",
    "ProductosClient",
    "ProductosListResponse",
    "RateLimitError",
    "SRI_PROCESSING",
    "ServerError",
    "SessionData",
    "ShiftAlreadyOpenError",
    "ShiftNotOpenError",
    "Sucursal",
    "SucursalSimple",
    "SucursalesClient",
    "SucursalesListResponse",
    "SucursalesUsuarioResponse",
    "TransferenciaRequest",
    "TransportError",
    "Transportista",
    "Turno",
    "TurnoHistorico",
    "TurnoHistoricoQuery",
    "TurnoStatus",
    "TurnosClient",
    "TurnosHistoricoResponse",
    "UnauthorizedError",
    "UserFacingError",
    "UserResponse",
    "ValidationError",
    "VentasClient",
    "consumidor_final",
    "load_config",
    "parse_inventario_response",
    "resolve_tenant",
    "sri_status_label",
    "tenant_headers",
    "to_user_facing_error",
    "unwrap_cliente",
    "validate_adjustment_payload",
    "validate_import_payload",
    "validate_new_client_payload",
    "validate_open_shift_payload",
    "validate_transfer_payload",
]
