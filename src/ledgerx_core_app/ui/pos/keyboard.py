from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

KEY_FOCUS_SEARCH = "F2"
KEY_CHECKOUT = "F9"
KEY_CUSTOMER = "F10"


@dataclass
class KeyboardBindings:
    """Global function-key shortcuts, live only between :meth:`activate` and :meth:`deactivate`."""

    handlers: dict[str, Callable[[], Any]] = field(default_factory=dict)
    active: bool = False

    def bind(self, key: str, handler: Callable[[], Any]) -> None:
        self.handlers[key.upper()] = handler

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def dispatch(self, key: str, *, composing: bool = False) -> dict[str, Any]:
        normalized = (key or "").upper()
        handler = self.handlers.get(normalized)
        if handler is None:
            return {"handled": False, "key": normalized, "reason": "unbound"}
        if not self.active:
            return {"handled": False, "key": normalized, "reason": "inactive"}
        if composing:
            return {"handled": False, "key": normalized, "reason": "composing"}
        logger.debug("pos_shortcut", extra={"key": normalized})
        return {"handled": True, "key": normalized, "result": handler()}
