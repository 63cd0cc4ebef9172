from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 10.0


@dataclass
class SriStatusPoller:
    """Background refresher for documents the SRI is still processing.

    ``has_pending`` is re-evaluated on every tick; once it reports no pending
    rows the worker exits on its own. ``stop`` is idempotent and is what a
    view calls on unmount.
    """

    refresh: Callable[[], object]
    has_pending: Callable[[], bool]
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    name: str = "sri-poller"
    _stop: threading.Event = field(default_factory=threading.Event, repr=False)
    _thread: threading.Thread | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> bool:
        with self._lock:
            if self.is_running:
                return True
            if not self.has_pending():
                return False
            self._stop = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stop,), name=self.name, daemon=True)
            self._thread.start()
        logger.debug("sri_poller_started", extra={"poller": self.name, "interval": self.interval_seconds})
        return True

    def stop(self) -> None:
        with self._lock:
            self._stop.set()
            thread = self._thread
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval_seconds + 1)

    def tick(self) -> bool:
        """Refresh once if anything is pending; returns whether polling should continue."""
        if not self.has_pending():
            return False
        try:
            self.refresh()
        except Exception:
            logger.exception("sri_poller_refresh_failed", extra={"poller": self.name})
        return self.has_pending()

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval_seconds):
            if not self.tick():
                logger.debug("sri_poller_idle", extra={"poller": self.name})
                break
        with self._lock:
            if self._thread is threading.current_thread():
                self._thread = None
