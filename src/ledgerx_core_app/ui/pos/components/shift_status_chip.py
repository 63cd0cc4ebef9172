from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledgerx_client_sdk import Turno


@dataclass
class ShiftStatusChip:
    turno: Turno | None

    def render(self) -> dict[str, Any]:
        if self.turno is None:
            return {"label": "Sin turno", "tone": "neutral", "sucursal": None, "inicio": None}
        inicio = self.turno.inicio_turno
        return {
            "label": f"Turno #{self.turno.id}",
            "tone": "success",
            "sucursal": self.turno.sucursal_nombre,
            "inicio": inicio.isoformat() if hasattr(inicio, "isoformat") else inicio,
        }
