from __future__ import annotations

from dataclasses import dataclass

from .models_clientes import TIPO_CEDULA, TIPO_RUC

REQUIRED_FIELDS_MESSAGE = "Complete los campos obligatorios (*)"

_ID_LENGTHS = {
    TIPO_RUC: (13, "El RUC debe tener 13 dígitos"),
    TIPO_CEDULA: (10, "La cédula debe tener 10 dígitos"),
}


@dataclass(frozen=True)
class PosValidationIssue:
    field: str
    reason: str


@dataclass(frozen=True)
class PosValidationResult:
    ok: bool
    issues: list[PosValidationIssue]

    @property
    def summary(self) -> str | None:
        if not self.issues:
            return None
        return self.issues[0].reason


def _blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_new_client_payload(
    *,
    tipo_identificacion: str | None,
    identificacion: str | None,
    razon_social: str | None,
    email: str | None,
) -> PosValidationResult:
    issues: list[PosValidationIssue] = []
    for field, value in (("identificacion", identificacion), ("razon_social", razon_social), ("email", email)):
        if _blank(value):
            issues.append(PosValidationIssue(field=field, reason=REQUIRED_FIELDS_MESSAGE))
    if issues:
        return PosValidationResult(ok=False, issues=issues)
    expected = _ID_LENGTHS.get(tipo_identificacion or "")
    if expected:
        length, reason = expected
        digits = (identificacion or "").strip()
        if len(digits) != length or not digits.isdigit():
            issues.append(PosValidationIssue(field="identificacion", reason=reason))
    return PosValidationResult(ok=not issues, issues=issues)


def validate_open_shift_payload(sucursal_id: int | None) -> PosValidationResult:
    if not sucursal_id:
        return PosValidationResult(ok=False, issues=[PosValidationIssue(field="sucursal_id", reason="Seleccione una sucursal")])
    return PosValidationResult(ok=True, issues=[])
