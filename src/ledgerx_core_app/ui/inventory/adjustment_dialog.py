from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ledgerx_client_sdk import AjusteRequest, InventarioDetalleRow, Producto, Sucursal
from ledgerx_client_sdk.models_inventario import TIPO_ENTRADA

from ledgerx_core_app.ui.inventory.workflow import WorkflowDialog


@dataclass
class AdjustmentDialog(WorkflowDialog):
    def prefill(
        self,
        row: InventarioDetalleRow | None,
        productos: Sequence[Producto],
        sucursales: Sequence[Sucursal],
    ) -> None:
        if row is not None:
            producto_id, sucursal_id = row.producto, row.sucursal
        else:
            producto_id = productos[0].id if productos else 0
            sucursal_id = sucursales[0].id if sucursales else 0
        self.open(
            {
                "producto_id": producto_id,
                "sucursal_id": sucursal_id,
                "tipo": TIPO_ENTRADA,
                "cantidad": "",
                "motivo": "",
            }
        )

    def to_request(self) -> AjusteRequest:
        values: dict[str, Any] = self.values
        return AjusteRequest(
            producto_id=int(values["producto_id"]),
            sucursal_id=int(values["sucursal_id"]),
            tipo=values["tipo"],
            cantidad=float(values["cantidad"]),
            motivo=str(values["motivo"]).strip(),
        )
