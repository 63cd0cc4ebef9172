from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledgerx_client_sdk.models_ventas import SRI_PROCESSING, sri_status_label

_TONES = {
    "AUT": "success",
    "PPR": "info",
    "NAT": "danger",
    "DEV": "warning",
}


@dataclass
class SriBadge:
    estado_sri: str | None

    def render(self) -> dict[str, Any]:
        return {
            "code": self.estado_sri,
            "label": sri_status_label(self.estado_sri),
            "tone": _TONES.get(self.estado_sri or "", "neutral"),
            "processing": self.estado_sri == SRI_PROCESSING,
        }
