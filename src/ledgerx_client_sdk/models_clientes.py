from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

CONSUMIDOR_FINAL_ID = "9999999999"
CONSUMIDOR_FINAL_NOMBRE = "CONSUMIDOR FINAL"

TIPO_RUC = "04"
TIPO_CEDULA = "05"
TIPO_PASAPORTE = "06"
TIPO_CONSUMIDOR_FINAL = "07"

TIPOS_IDENTIFICACION = {
    TIPO_CEDULA: "Cédula",
    TIPO_RUC: "RUC",
    TIPO_PASAPORTE: "Pasaporte",
    TIPO_CONSUMIDOR_FINAL: "Consumidor Final",
}


class Cliente(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    tipo_identificacion: str | None = None
    identificacion: str
    razon_social: str
    email: str = ""
    direccion: str = ""
    telefono: str | None = None

    @property
    def is_consumidor_final(self) -> bool:
        return self.identificacion == CONSUMIDOR_FINAL_ID


def consumidor_final() -> Cliente:
    return Cliente(identificacion=CONSUMIDOR_FINAL_ID, razon_social=CONSUMIDOR_FINAL_NOMBRE, email="", direccion="")


class ClienteCreateRequest(BaseModel):
    tipo_identificacion: str = TIPO_CEDULA
    identificacion: str
    razon_social: str
    email: str
    direccion: str = ""
    telefono: str | None = None


class ClientesListResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int | None = None
    results: list[Cliente] = Field(default_factory=list)

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


def unwrap_cliente(payload: Any) -> dict[str, Any]:
    """Return the client record from a bare record or a ``data``/``results`` envelope."""
    if not isinstance(payload, dict):
        raise ValueError("Expected client record to be a JSON object")
    inner = payload.get("data")
    if inner is None:
        inner = payload.get("results")
    if isinstance(inner, list):
        inner = inner[0] if inner else None
    if isinstance(inner, dict):
        return inner
    return payload
