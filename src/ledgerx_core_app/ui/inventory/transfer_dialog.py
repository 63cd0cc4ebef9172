from __future__ import annotations

from dataclasses import dataclass

from ledgerx_client_sdk import TransferenciaRequest, Transportista

from ledgerx_core_app.ui.inventory.workflow import WorkflowDialog


def blank_transfer() -> dict[str, object]:
    return {
        "producto_id": 0,
        "origen_id": 0,
        "destino_id": 0,
        "cantidad": "",
        "generar_guia": False,
        "transportista_ruc": "",
        "transportista_razon_social": "",
        "transportista_placa": "",
    }


@dataclass
class TransferDialog(WorkflowDialog):
    def prefill(self) -> None:
        self.open(blank_transfer())

    def to_request(self) -> TransferenciaRequest:
        values = self.values
        transportista = None
        if values.get("generar_guia"):
            placa = str(values.get("transportista_placa") or "").strip()
            transportista = Transportista(
                ruc=str(values["transportista_ruc"]).strip(),
                razon_social=str(values["transportista_razon_social"]).strip(),
                placa=placa or None,
            )
        return TransferenciaRequest(
            producto_id=int(values["producto_id"]),
            origen_id=int(values["origen_id"]),
            destino_id=int(values["destino_id"]),
            cantidad=float(values["cantidad"]),
            generar_guia=bool(values.get("generar_guia")),
            transportista=transportista,
        )
