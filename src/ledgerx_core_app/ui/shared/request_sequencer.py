from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class RequestSequencer:
    """Monotonic tokens for async loads; only the newest token may apply its result.

    A view calls :meth:`issue` before starting a load and checks
    :meth:`is_current` before writing the response into its state.
    :meth:`invalidate` retires every outstanding token (used on unmount).
    """

    _counter: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def issue(self) -> int:
        with self._lock:
            self._counter += 1
            return self._counter

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._counter

    def invalidate(self) -> None:
        with self._lock:
            self._counter += 1

    @property
    def current(self) -> int:
        return self._counter
