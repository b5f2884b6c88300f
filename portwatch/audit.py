"""Structured audit logging of port scan events as newline-delimited JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, TextIO

from portwatch.snapshot import DiffResult


def _ports(entries: Iterable[Any]) -> list[int]:
    return [getattr(entry, "port", entry) for entry in entries]


def _timestamp(moment: datetime) -> str:
    text = moment.isoformat()
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


@dataclass
class Entry:
    """A single audit log record."""

    timestamp: datetime
    host: str
    message: str
    opened: list[int] = field(default_factory=list)
    closed: list[int] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"timestamp": _timestamp(self.timestamp), "host": self.host}
        if self.opened:
            data["opened"] = list(self.opened)
        if self.closed:
            data["closed"] = list(self.closed)
        data["message"] = self.message
        return data


def build_message(diff: DiffResult) -> str:
    """Summarise a diff in a few words."""
    if diff.opened and diff.closed:
        return "ports opened and closed"
    if diff.opened:
        return "new ports detected"
    if diff.closed:
        return "ports closed"
    return "no changes"


class AuditLogger:
    """Writes audit entries to a text stream, one JSON object per line."""

    def __init__(self, stream: TextIO) -> None:
        if stream is None:
            raise ValueError("audit: stream must not be None")
        self.stream = stream

    def record(self, host: str, diff: DiffResult) -> Entry:
        """Write an audit entry for host and diff and return it."""
        entry = Entry(
            timestamp=datetime.now(timezone.utc),
            host=host,
            message=build_message(diff),
            opened=_ports(diff.opened),
            closed=_ports(diff.closed),
        )
        self.stream.write(json.dumps(entry._to_dict()) + "\n")
        return entry