from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data_available": self.data_available,
        }


def resolve_state(*, is_loading: bool, error: str | None, has_data: bool) -> ViewState:
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Cargando...", data_available=has_data)
    if error and has_data:
        return ViewState(ViewStateStatus.PARTIAL_ERROR, error, data_available=True)
    if error:
        return ViewState(ViewStateStatus.FATAL_ERROR, error)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, "No hay registros")
    return ViewState(ViewStateStatus.SUCCESS, "Listo", data_available=True)
