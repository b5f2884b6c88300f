"""Approved ("known-good") port state per host.

Operators save the current scan as a baseline and later compare live scans
against it to find ports that deviate.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from portwatch import snapshot
from portwatch.scanner import PortState

_UNSAFE = str.maketrans({":": "_", "/": "_", "\\": "_"})


def sanitize(host: str) -> str:
    """Replace characters unsafe in file names with underscores."""
    return host.translate(_UNSAFE)


@dataclass
class Baseline:
    """An approved set of scan results for a host."""

    host: str
    ports: list[PortState] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _port_from_dict(data: dict[str, Any]) -> PortState:
    return PortState(
        port=int(data.get("port", 0)),
        protocol=data.get("protocol", "") or "",
        open=bool(data.get("open", False)),
        service=data.get("service", "") or "",
        host=data.get("host", "") or "",
    )


class Manager:
    """Stores and loads baselines as JSON files in a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, host: str) -> Path:
        return self.directory / f"{sanitize(host)}.baseline.json"

    def save(self, host: str, results: Iterable[PortState]) -> None:
        """Write results as the baseline for host."""
        data = {
            "host": host,
            "ports": [asdict(state) for state in results],
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._path(host).write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load(self, host: str) -> Baseline | None:
        """Return the stored baseline for host, or None if there is none."""
        try:
            text = self._path(host).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"baseline: unmarshal: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("baseline: unmarshal: expected a JSON object")
        raw_time = data.get("created_at")
        created_at = (
            datetime.fromisoformat(raw_time)
            if raw_time
            else datetime(1, 1, 1, tzinfo=timezone.utc)
        )
        return Baseline(
            host=data.get("host", "") or "",
            ports=[_port_from_dict(p) for p in data.get("ports") or []],
            created_at=created_at,
        )

    def delete(self, host: str) -> None:
        """Remove the baseline for host; a missing baseline is not an error."""
        self._path(host).unlink(missing_ok=True)


@dataclass
class Deviation:
    """Ports that differ from the approved baseline."""

    host: str
    extra: list[int] = field(default_factory=list)
    missing: list[int] = field(default_factory=list)


def compare(baseline: Baseline | None, live: Iterable[PortState]) -> Deviation | None:
    """Compare live results with baseline; None when there is no baseline or no deviation."""
    if baseline is None:
        return None
    changes = snapshot.diff(baseline.ports, list(live))
    if not changes.opened and not changes.closed:
        return None
    return Deviation(host=baseline.host, extra=list(changes.opened), missing=list(changes.closed))