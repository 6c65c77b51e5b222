"""Thread-safe running flag."""

from __future__ import annotations

import threading

ENABLED = "enabled"
DISABLED = "disabled"
YES = "是"
NO = "否"


class RunStatus:
    """A boolean running flag guarded by a lock."""

    def __init__(self, running: bool = False) -> None:
        self._lock = threading.Lock()
        self._running = running

    def set_running(self, value: bool) -> None:
        with self._lock:
            self._running = bool(value)

    def is_running(self) -> bool:
        with self._lock:
            return self._running