"""Per-host scan throttling.

No host is scanned more often than a configured minimum interval, which
reduces noise and network load.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Throttle:
    """Enforces a minimum interval between scans of each host."""

    def __init__(
        self, interval: timedelta | float, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        if not isinstance(interval, timedelta):
            interval = timedelta(seconds=interval)
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._last: dict[str, datetime] = {}

    def allow(self, host: str) -> bool:
        """Report whether host may be scanned now; record the scan if so."""
        with self._lock:
            now = self._clock()
            last = self._last.get(host)
            if last is not None and now - last < self.interval:
                return False
            self._last[host] = now
            return True

    def reset(self, host: str) -> None:
        """Forget the last scan of host so it may be scanned immediately."""
        with self._lock:
            self._last.pop(host, None)

    def next_allowed(self, host: str) -> datetime | None:
        """Return the earliest time host may be scanned again; None if never scanned."""
        with self._lock:
            last = self._last.get(host)
            return None if last is None else last + self.interval