from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductQuery(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: int | None = None
    page_size: int | None = None
    search: str | None = None
    categoria: int | None = None
    activo: bool | None = None
    sucursal: int | None = None


class Producto(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    nombre: str | None = None
    codigo_producto: str | None = None
    descripcion: str | None = None
    categoria: int | None = None
    categoria_nombre: str | None = None
    precio: float | None = None
    stock: float = 0
    activo: bool | None = None


class Presentacion(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    nombre_presentacion: str | None = None
    cantidad: float | None = None
    precio: float
    porcentaje_adicional: float | None = None
    sucursal_id: int | None = None
    sucursal_nombre: str | None = None


def _unwrap_list(data: Any) -> Any:
    if isinstance(data, list):
        return {"results": data}
    if not isinstance(data, dict):
        return data
    values = dict(data)
    if "results" not in values and isinstance(values.get("data"), list):
        values["results"] = values.pop("data")
    return values


class ProductosListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[Producto] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_data_envelope(cls, data: Any) -> Any:
        return _unwrap_list(data)


class PresentacionesResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    data: list[Presentacion] = Field(default_factory=list)
