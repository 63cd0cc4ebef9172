from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ledgerx_client_sdk import InventarioAgrupadoResponse, InventarioDetalleResponse


def _date(value: Any) -> Any:
    return value.isoformat() if hasattr(value, "isoformat") else value


@dataclass
class InventoryTable:
    response: InventarioDetalleResponse | InventarioAgrupadoResponse | None
    expanded: set[int] = field(default_factory=set)

    def render(self) -> dict[str, Any]:
        if self.response is None:
            return {"mode": None, "count": 0, "rows": []}
        if isinstance(self.response, InventarioAgrupadoResponse):
            rows = [self._grouped_row(row) for row in self.response.results]
        else:
            rows = [self._detail_row(row) for row in self.response.results]
        return {"mode": self.response.mode, "count": len(rows), "rows": rows}

    @staticmethod
    def _detail_row(row) -> dict[str, Any]:
        return {
            "id": row.id,
            "nombre": row.display_name,
            "codigo": row.display_code,
            "producto_id": row.producto,
            "sucursal_id": row.sucursal,
            "sucursal": row.sucursal_nombre,
            "stock": row.cantidad,
            "actualizado": _date(row.fecha_actualizacion),
            "can_adjust": True,
        }

    def _grouped_row(self, row) -> dict[str, Any]:
        is_expanded = row.id in self.expanded
        return {
            "id": row.id,
            "nombre": row.display_name,
            "codigo": row.display_code,
            "sucursal": f"Global ({len(row.desglose)} sucursales)",
            "stock": row.stock_total_global,
            "actualizado": _date(row.fecha_actualizacion),
            "can_adjust": False,
            "expandable": bool(row.desglose),
            "expanded": is_expanded,
            "desglose": [
                {"sucursal_id": sub.sucursal, "sucursal": sub.sucursal_nombre, "stock": sub.cantidad}
                for sub in row.desglose
            ]
            if is_expanded
            else [],
        }
