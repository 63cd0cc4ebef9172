from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ledgerx_client_sdk import CierreTurnoRequest

from ledgerx_core_app.ui.shared.validators import SHIFT_DECLARATION_FIELDS, parse_amount, validate_shift_declaration

CONFIRM_PROMPT = "¿Estás seguro de cerrar el turno con estos valores? Esta acción es irreversible."


def _empty_values() -> dict[str, Any]:
    values: dict[str, Any] = {name: Decimal("0") for name in SHIFT_DECLARATION_FIELDS}
    values["observaciones"] = ""
    return values


@dataclass
class ShiftCloseDialog:
    """Cash-count declaration for closing a shift.

    ``expected`` optionally carries what the system expects per payment method
    (``efectivo``, ``tarjeta``, ``transferencia``) so the variance can be shown.
    """

    expected: dict[str, Decimal] | None = None
    values: dict[str, Any] = field(default_factory=_empty_values)
    field_errors: dict[str, str] = field(default_factory=dict)

    def set_value(self, name: str, value: Any) -> None:
        if name == "observaciones":
            self.values[name] = str(value or "")
            return
        if name not in SHIFT_DECLARATION_FIELDS:
            raise KeyError(name)
        self.values[name] = parse_amount(value)

    def update(self, values: dict[str, Any]) -> None:
        for name, value in values.items():
            self.set_value(name, value)

    def total_declarado(self) -> Decimal:
        return (
            self.values["efectivo_total"]
            + self.values["tarjeta_total"]
            + self.values["transferencia_total"]
            - self.values["salidas_caja"]
        )

    def variance(self) -> dict[str, Decimal] | None:
        if not self.expected:
            return None
        pairs = {
            "efectivo": self.values["efectivo_total"] - self.values["salidas_caja"],
            "tarjeta": self.values["tarjeta_total"],
            "transferencia": self.values["transferencia_total"],
        }
        return {key: declared - Decimal(str(self.expected.get(key, 0))) for key, declared in pairs.items()}

    def validate(self) -> bool:
        result = validate_shift_declaration(self.values)
        self.field_errors = result.field_errors
        return result.ok

    def to_request(self) -> CierreTurnoRequest:
        notes = (self.values.get("observaciones") or "").strip()
        return CierreTurnoRequest(
            efectivo_total=float(self.values["efectivo_total"]),
            tarjeta_total=float(self.values["tarjeta_total"]),
            transferencia_total=float(self.values["transferencia_total"]),
            salidas_caja=float(self.values["salidas_caja"]),
            observaciones=notes or None,
        )

    def render(self) -> dict[str, Any]:
        return {
            "values": dict(self.values),
            "total_declarado": self.total_declarado(),
            "variance": self.variance(),
            "field_errors": dict(self.field_errors),
            "confirm_prompt": CONFIRM_PROMPT,
        }
