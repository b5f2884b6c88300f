"""A thread-safe store mapping host addresses to human-readable labels.

Reporters and notifiers use labels to show descriptive names instead of raw
IP addresses or host names.
"""

from __future__ import annotations

import threading
from typing import Mapping


class Labels:
    """Host to free-form label mapping."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, str] = dict(initial or {})

    def set(self, host: str, label: str) -> None:
        """Assign label to host, replacing any existing value."""
        with self._lock:
            self._data[host] = label

    def get(self, host: str) -> str | None:
        """Return the label for host, or None if it has none."""
        with self._lock:
            return self._data.get(host)

    def delete(self, host: str) -> None:
        """Remove the label for host."""
        with self._lock:
            self._data.pop(host, None)

    def all(self) -> dict[str, str]:
        """Return a copy of every host to label mapping."""
        with self._lock:
            return dict(self._data)