from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .models_inventario import SAME_BRANCH_MESSAGE, TIPO_ENTRADA, TIPO_SALIDA

CARRIER_REQUIRED_MESSAGE = "Debe completar RUC y Razón Social del transportista"
FILE_REQUIRED_MESSAGE = "Seleccione un archivo"
BRANCH_REQUIRED_MESSAGE = "Seleccione una sucursal"


@dataclass(frozen=True)
class InventoryValidationIssue:
    field: str
    reason: str


@dataclass(frozen=True)
class InventoryValidationResult:
    ok: bool
    issues: list[InventoryValidationIssue]

    @property
    def summary(self) -> str | None:
        if not self.issues:
            return None
        return self.issues[0].reason


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _branch_id(value: Any) -> int | None:
    """Form ids arrive as ints or strings; anything else is treated as unset."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _positive_number(value: Any) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def validate_adjustment_payload(payload: Mapping[str, Any]) -> InventoryValidationResult:
    issues: list[InventoryValidationIssue] = []
    if not payload.get("producto_id"):
        issues.append(InventoryValidationIssue(field="producto_id", reason="Seleccione un producto"))
    if not payload.get("sucursal_id"):
        issues.append(InventoryValidationIssue(field="sucursal_id", reason=BRANCH_REQUIRED_MESSAGE))
    if payload.get("tipo") not in {TIPO_ENTRADA, TIPO_SALIDA}:
        issues.append(InventoryValidationIssue(field="tipo", reason="Tipo de ajuste inválido"))
    if not _positive_number(payload.get("cantidad")):
        issues.append(InventoryValidationIssue(field="cantidad", reason="La cantidad debe ser mayor a 0"))
    if _blank(payload.get("motivo")):
        issues.append(InventoryValidationIssue(field="motivo", reason="Ingrese el motivo del ajuste"))
    return InventoryValidationResult(ok=not issues, issues=issues)


def validate_transfer_payload(payload: Mapping[str, Any]) -> InventoryValidationResult:
    origen = _branch_id(payload.get("origen_id"))
    destino = _branch_id(payload.get("destino_id"))
    # source == destination is checked first so an unfilled 0/0 form reports it
    if origen is not None and origen == destino:
        return InventoryValidationResult(
            ok=False,
            issues=[InventoryValidationIssue(field="destino_id", reason=SAME_BRANCH_MESSAGE)],
        )
    issues: list[InventoryValidationIssue] = []
    if payload.get("generar_guia"):
        if _blank(payload.get("transportista_ruc")) or _blank(payload.get("transportista_razon_social")):
            issues.append(InventoryValidationIssue(field="transportista", reason=CARRIER_REQUIRED_MESSAGE))
    if not payload.get("producto_id"):
        issues.append(InventoryValidationIssue(field="producto_id", reason="Seleccione un producto"))
    if not origen or not destino:
        issues.append(InventoryValidationIssue(field="origen_id", reason=BRANCH_REQUIRED_MESSAGE))
    if not _positive_number(payload.get("cantidad")):
        issues.append(InventoryValidationIssue(field="cantidad", reason="La cantidad debe ser mayor a 0"))
    return InventoryValidationResult(ok=not issues, issues=issues)


def validate_import_payload(*, file_name: str | None, sucursal_id: int | None) -> InventoryValidationResult:
    issues: list[InventoryValidationIssue] = []
    if _blank(file_name):
        issues.append(InventoryValidationIssue(field="file", reason=FILE_REQUIRED_MESSAGE))
    if not sucursal_id:
        issues.append(InventoryValidationIssue(field="sucursal_id", reason=BRANCH_REQUIRED_MESSAGE))
    return InventoryValidationResult(ok=not issues, issues=issues)
