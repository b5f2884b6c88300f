"""Per-key rate limiting to throttle alert notifications and avoid alert fatigue."""

from __future__ import annotations

import threading
import time
from typing import Callable

DEFAULT_INTERVAL = 60.0


class Limiter:
    """Lets at most one event per key through in each interval (seconds)."""

    def __init__(
        self, interval: float = DEFAULT_INTERVAL, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.interval = interval if interval > 0 else DEFAULT_INTERVAL
        self._clock = clock
        self._lock = threading.Lock()
        self._last: dict[str, float] = {}

    def allow(self, key: str) -> bool:
        """Report whether the event for key may pass; record it if so."""
        with self._lock:
            now = self._clock()
            last = self._last.get(key)
            if last is not None and now - last < self.interval:
                return False
            self._last[key] = now
            return True

    def reset(self, key: str) -> None:
        """Forget the state for key."""
        with self._lock:
            self._last.pop(key, None)

    def reset_all(self) -> None:
        """Forget the state for every key."""
        with self._lock:
            self._last.clear()