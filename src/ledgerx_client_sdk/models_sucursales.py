from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SucursalSimple(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    nombre: str
    codigo_establecimiento: str | None = None
    es_matriz: bool | None = None


class Sucursal(SucursalSimple):
    direccion: str | None = None
    telefono: str | None = None
    punto_emision: str | None = None
    secuencial_actual: str | None = None


class SucursalesUsuarioResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    sucursales: list[SucursalSimple] = Field(default_factory=list)


class SucursalesListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int | None = None
    results: list[Sucursal] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_envelopes(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"results": data}
        if isinstance(data, dict) and "results" not in data and isinstance(data.get("data"), list):
            values = dict(data)
            values["results"] = values.pop("data")
            return values
        return data
