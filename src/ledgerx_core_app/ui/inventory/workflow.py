from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class WorkflowStatus(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


@dataclass
class WorkflowDialog:
    """``CLOSED -> OPEN(prefilled) -> SUBMITTING -> (CLOSED | OPEN + error)``."""

    status: WorkflowStatus = WorkflowStatus.CLOSED
    values: dict[str, Any] = field(default_factory=dict)
    error_message: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_open(self) -> bool:
        return self.status is not WorkflowStatus.CLOSED

    @property
    def is_submitting(self) -> bool:
        return self.status is WorkflowStatus.SUBMITTING

    def open(self, values: dict[str, Any]) -> None:
        self.values = values
        self.error_message = None
        self.field_errors = {}
        self.status = WorkflowStatus.OPEN

    def update(self, **changes: Any) -> None:
        self.values.update(changes)

    def close(self) -> None:
        self.status = WorkflowStatus.CLOSED
        self.error_message = None
        self.field_errors = {}

    def begin_submit(self) -> None:
        self.status = WorkflowStatus.SUBMITTING
        self.error_message = None

    def fail(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        self.status = WorkflowStatus.OPEN
        self.error_message = message
        self.field_errors = field_errors or {}

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "values": dict(self.values),
            "error": self.error_message,
            "field_errors": dict(self.field_errors),
        }
