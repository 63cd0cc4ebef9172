from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Turno(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    sucursal: int | None = None
    sucursal_nombre: str | None = None
    inicio_turno: datetime | str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_shape(cls, data: Any) -> Any:
        # /api/auth/turno-activo/ returns hora_inicio and the branch name under "sucursal"
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if "inicio_turno" not in values and "hora_inicio" in values:
            values["inicio_turno"] = values.get("hora_inicio")
        sucursal = values.get("sucursal")
        if isinstance(sucursal, str) and not sucursal.isdigit():
            values.setdefault("sucursal_nombre", sucursal)
            values["sucursal"] = None
        return values


class TurnoStatus(BaseModel):
    """Normalised answer of both shift-detection endpoints."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    activo: bool = False
    turno: Turno | None = None
    error: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        activo = values.get("activo")
        if activo is None:
            activo = values.get("tiene_turno_activo", False)
        turno = values.get("turno")
        if turno is None:
            turno = values.get("data")
        values["activo"] = bool(activo) and turno is not None
        values["turno"] = turno
        values.pop("data", None)
        values.pop("tiene_turno_activo", None)
        return values


class AbrirTurnoRequest(BaseModel):
    sucursal_id: int


class AbrirTurnoResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    data: Turno | None = None
    message: str | None = None
    error: str | None = None


class CierreTurnoRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    efectivo_total: float = Field(ge=0)
    tarjeta_total: float = Field(default=0, ge=0)
    transferencia_total: float = Field(default=0, ge=0)
    salidas_caja: float = Field(default=0, ge=0)
    observaciones: str | None = None


class CierreTurnoResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    message: str | None = None
    data: dict[str, Any] | None = None


class TurnoHistorico(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    sucursal_nombre: str | None = None
    usuario_nombre: str | None = None
    inicio_turno: datetime | str | None = None
    fin_turno: datetime | str | None = None
    total_ventas: float | None = None
    estado: str | None = None


class TurnoHistoricoQuery(BaseModel):
    page: int | None = None
    start_date: str | None = None
    end_date: str | None = None


class TurnosHistoricoResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int | None = None
    results: list[TurnoHistorico] = Field(default_factory=list)
