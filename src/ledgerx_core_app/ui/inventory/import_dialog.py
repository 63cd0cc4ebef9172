from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from ledgerx_client_sdk import Sucursal

from ledgerx_core_app.ui.inventory.workflow import WorkflowDialog

OVERWRITE_NOTICE = 'El stock se ajustará ("set") para los productos en el archivo.'
ACCEPTED_EXTENSIONS = (".xlsx", ".xls", ".csv")


@dataclass
class ImportDialog(WorkflowDialog):
    def prefill(self, selected_sucursal: int | None, sucursales: Sequence[Sucursal]) -> None:
        default_branch = selected_sucursal or (sucursales[0].id if sucursales else None)
        self.open({"sucursal_id": default_branch, "file": None})

    @property
    def file_name(self) -> str | None:
        file = self.values.get("file")
        if file is None:
            return None
        if isinstance(file, (str, Path)):
            return Path(file).name
        return Path(getattr(file, "name", "") or "").name or None

    def has_supported_extension(self) -> bool:
        name = (self.file_name or "").lower()
        return name.endswith(ACCEPTED_EXTENSIONS)

    def render(self) -> dict[str, Any]:
        payload = super().render()
        payload["values"] = {"sucursal_id": self.values.get("sucursal_id"), "file": self.file_name}
        payload["notice"] = OVERWRITE_NOTICE
        payload["accepted_extensions"] = list(ACCEPTED_EXTENSIONS)
        return payload
