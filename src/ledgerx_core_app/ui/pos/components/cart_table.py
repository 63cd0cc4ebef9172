from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledgerx_core_app.ui.pos.session_state import CartLine


@dataclass
class CartTable:
    lines: tuple[CartLine, ...]

    def render(self) -> dict[str, Any]:
        rows = [
            {
                "index": index,
                "producto_id": line.producto_id,
                "producto": line.producto_nombre,
                "presentacion_id": line.presentacion_id,
                "presentacion": line.presentacion_nombre,
                "cantidad": line.cantidad,
                "precio": line.precio,
                "subtotal": line.subtotal,
                "impuesto": line.impuesto,
                "total": line.total,
            }
            for index, line in enumerate(self.lines)
        ]
        return {
            "count": len(rows),
            "units": sum(line.cantidad for line in self.lines),
            "rows": rows,
        }
