from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledgerx_core_app.ui.pos.session_state import CUSTOMER_DATA_THRESHOLD, CartTotals


@dataclass
class TotalsBar:
    totals: CartTotals
    customer_is_default: bool

    def render(self) -> dict[str, Any]:
        return {
            "subtotal": self.totals.subtotal,
            "impuesto": self.totals.impuesto,
            "total": self.totals.total,
            "requires_customer": self.totals.total > CUSTOMER_DATA_THRESHOLD and self.customer_is_default,
        }
