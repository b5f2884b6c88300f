"""Human-readable alerts for port changes between two consecutive scans.

A Notifier writes one line per opened or closed port to a text stream,
or a single informational line when nothing changed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, TextIO

from portwatch.snapshot import DiffResult


class Level(str, Enum):
    """Severity of an alert."""

    INFO = "INFO"
    WARN = "WARN"
    ALERT = "ALERT"

    def __str__(self) -> str:
        return self.value


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


def _describe(entry: Any) -> str:
    port = getattr(entry, "port", entry)
    protocol = getattr(entry, "protocol", "tcp")
    service = getattr(entry, "service", "")
    return f"{port}/{protocol} ({service})"


@dataclass(frozen=True)
class Alert:
    """A single port change notification."""

    timestamp: datetime
    level: Level
    message: str

    def __str__(self) -> str:
        return f"[{_rfc3339(self.timestamp)}] {self.level.value} {self.message}"


class Notifier:
    """Writes alerts to a text stream (standard output by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def notify(self, diff: DiffResult) -> list[Alert]:
        """Write an alert for every change in diff and return the alerts."""
        now = datetime.now().astimezone()
        alerts = [
            Alert(now, Level.ALERT, f"Port opened: {_describe(entry)}") for entry in diff.opened
        ]
        alerts.extend(
            Alert(now, Level.WARN, f"Port closed: {_describe(entry)}") for entry in diff.closed
        )
        if not alerts:
            alerts.append(Alert(now, Level.INFO, "No port changes detected."))
        for alert in alerts:
            self.stream.write(f"{alert}\n")
        return alerts