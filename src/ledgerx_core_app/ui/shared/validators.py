from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

SHIFT_DECLARATION_FIELDS = ("efectivo_total", "tarjeta_total", "transferencia_total", "salidas_caja")


@dataclass
class ValidationResult:
    ok: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    summary: list[str] = field(default_factory=list)


def _result(errors: dict[str, str]) -> ValidationResult:
    return ValidationResult(ok=not errors, field_errors=errors, summary=list(errors.values()))


def parse_amount(value: Any) -> Decimal:
    """Form amounts: blank or unparsable input counts as zero."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation:
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def validate_shift_declaration(values: dict[str, Any]) -> ValidationResult:
    errors: dict[str, str] = {}
    for name in SHIFT_DECLARATION_FIELDS:
        amount = parse_amount(values.get(name))
        if amount < 0:
            errors[name] = "El valor no puede ser negativo."
    return _result(errors)
