from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from .models_clientes import Cliente

CODIGO_PAGO_SIN_SISTEMA_FINANCIERO = "01"

SRI_STATUS_LABELS = {
    "AUT": "AUTORIZADO",
    "PPR": "PROCESANDO",
    "NAT": "NO AUTORIZADO",
    "DEV": "DEVUELTA",
}
SRI_PROCESSING = "PPR"


def sri_status_label(estado: str | None) -> str:
    return SRI_STATUS_LABELS.get(estado or "", "PENDIENTE")


class FacturaPosItem(BaseModel):
    id: int
    presentacion_id: int
    cantidad: int = Field(ge=1)
    precio: float = Field(ge=0)


class FacturaPosPago(BaseModel):
    codigo: str = CODIGO_PAGO_SIN_SISTEMA_FINANCIERO
    total: float = Field(ge=0)


class FacturaPosRequest(BaseModel):
    cliente: Cliente
    items: list[FacturaPosItem] = Field(min_length=1)
    pago: FacturaPosPago


class FacturaPosResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    estado_sri: str | None = None
    clave_acceso: str | None = None
    mensajes_sri: list[str] = Field(default_factory=list)

    @property
    def estado_display(self) -> str:
        if self.estado_sri == SRI_PROCESSING:
            return "En Procesamiento"
        return self.estado_sri or ""


class Factura(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    numero_autorizacion: str | None = None
    fecha_emision: datetime | date | str | None = None
    cliente_nombre: str | None = None
    total_con_impuestos: float | None = None
    estado: str | None = None
    estado_pago: str | None = None
    clave_acceso: str | None = None
    estado_sri: str | None = None
    mensajes_sri: list[str] = Field(default_factory=list)


class FacturasQuery(BaseModel):
    page: int | None = None
    page_size: int | None = None
    start_date: str | None = None
    end_date: str | None = None
    search: str | None = None


class FacturasResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[Factura] = Field(default_factory=list)


class Guia(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    estado_sri: str | None = None
    fecha_emision: datetime | date | str | None = None
    numero_autorizacion: str | None = None
    motivo_traslado: str | None = None
    placa_vehiculo: str | None = None
    razon_social_transportista: str | None = None
    destinatarios: list[dict] = Field(default_factory=list)


class GuiasQuery(BaseModel):
    page: int | None = None
    search: str | None = None
    estado_sri: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class GuiasResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[Guia] = Field(default_factory=list)
