"""Suppress repeated alerts for the same host within a cooldown window."""

from __future__ import annotations

import threading
import time
from typing import Callable


class Suppressor:
    """Tracks when each host was last alerted and holds back duplicates."""

    def __init__(self, cooldown: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.cooldown = cooldown
        self._clock = clock
        self._lock = threading.Lock()
        self._last: dict[str, float] = {}

    def allow(self, host: str) -> bool:
        """Report whether an alert for host should be sent now."""
        with self._lock:
            last = self._last.get(host)
            if last is not None and self._clock() - last < self.cooldown:
                return False
            self._last[host] = self._clock()
            return True

    def reset(self, host: str) -> None:
        """Clear the suppression state for host."""
        with self._lock:
            self._last.pop(host, None)

    def reset_all(self) -> None:
        """Clear the suppression state for every host."""
        with self._lock:
            self._last.clear()