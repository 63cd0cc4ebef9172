from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

MODE_DETALLE = "detalle"
MODE_AGRUPADO = "agrupado"

TIPO_ENTRADA = "ENTRADA"
TIPO_SALIDA = "SALIDA"

SAME_BRANCH_MESSAGE = "La sucursal de origen y destino no pueden ser la misma"


class InventarioQuery(BaseModel):
    page: int | None = None
    search: str | None = None
    sucursal: int | None = None
    agrupado: bool | None = None


class _InventarioRowBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    producto_nombre: str | None = None
    nombre: str | None = None
    producto_codigo: str | None = None
    codigo_producto: str | None = None
    fecha_actualizacion: datetime | str | None = None

    @property
    def display_name(self) -> str:
        return self.producto_nombre or self.nombre or ""

    @property
    def display_code(self) -> str:
        return self.producto_codigo or self.codigo_producto or ""


class InventarioDetalleRow(_InventarioRowBase):
    producto: int
    sucursal: int
    sucursal_nombre: str | None = None
    cantidad: float = 0
    stock_minimo: float | None = None


class DesgloseSucursal(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    sucursal: int | None = None
    sucursal_nombre: str | None = None
    cantidad: float = 0


class InventarioAgrupadoRow(_InventarioRowBase):
    stock_total_global: float = 0
    desglose: list[DesgloseSucursal] = Field(default_factory=list)


class InventarioDetalleResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    mode: Literal["detalle"] = MODE_DETALLE
    count: int | None = None
    results: list[InventarioDetalleRow] = Field(default_factory=list)


class InventarioAgrupadoResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    mode: Literal["agrupado"] = MODE_AGRUPADO
    count: int | None = None
    results: list[InventarioAgrupadoRow] = Field(default_factory=list)


InventarioResponse = Annotated[
    Union[InventarioDetalleResponse, InventarioAgrupadoResponse],
    Field(discriminator="mode"),
]

_inventario_adapter: TypeAdapter[InventarioResponse] = TypeAdapter(InventarioResponse)


def parse_inventario_response(data: Any) -> InventarioDetalleResponse | InventarioAgrupadoResponse:
    """Validate an inventory payload, branching on the server-declared ``mode``.

    Payloads without ``mode`` are treated as detail rows.
    """
    if isinstance(data, list):
        data = {"results": data}
    if not isinstance(data, dict):
        raise ValueError("Expected inventory response to be a JSON object")
    values = dict(data)
    if not values.get("mode"):
        values["mode"] = MODE_DETALLE
    return _inventario_adapter.validate_python(values)


class AjusteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    producto_id: int = Field(gt=0)
    sucursal_id: int = Field(gt=0)
    tipo: Literal["ENTRADA", "SALIDA"] = TIPO_ENTRADA
    cantidad: float = Field(gt=0)
    motivo: str = Field(min_length=1)


class Transportista(BaseModel):
    ruc: str = Field(min_length=1)
    razon_social: str = Field(min_length=1)
    placa: str | None = None


class TransferenciaRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    producto_id: int = Field(gt=0)
    origen_id: int
    destino_id: int
    cantidad: float = Field(gt=0)
    generar_guia: bool = False
    transportista: Transportista | None = None

    @model_validator(mode="after")
    def _distinct_branches(self) -> TransferenciaRequest:
        if self.origen_id == self.destino_id:
            raise ValueError(SAME_BRANCH_MESSAGE)
        return self


class CargaMasivaResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: str | None = None
    errors: list[str] = Field(default_factory=list)

    @property
    def error_summary(self) -> str:
        return f"Error: {', '.join(self.errors)}"
