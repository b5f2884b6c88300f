"""Save and load scan snapshots and compute what changed between them.

Snapshots are stored as JSON. ``diff`` compares two sets of scan data and
reports the ports that were opened or closed.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator, Union

from portwatch.scanner import PortState, ScanResult

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class DiffResult:
    """Ports opened or closed between two scans."""

    opened: list[int] = field(default_factory=list)
    closed: list[int] = field(default_factory=list)


@dataclass
class Snapshot:
    """A saved state of a port scan."""

    host: str
    timestamp: datetime
    results: list[ScanResult] = field(default_factory=list)

    @classmethod
    def create(cls, host: str, results: Iterable[ScanResult]) -> "Snapshot":
        """Build a snapshot of results stamped with the current time."""
        return cls(host=host, timestamp=datetime.now(timezone.utc), results=list(results))


ScanData = Union[Snapshot, ScanResult, Iterable[Union[ScanResult, PortState]], None]


def _iter_states(source: ScanData) -> Iterator[PortState]:
    if source is None:
        return
    if isinstance(source, Snapshot):
        for result in source.results:
            yield from result.ports
    elif isinstance(source, ScanResult):
        yield from source.ports
    else:
        for item in source:
            if isinstance(item, ScanResult):
                yield from item.ports
            else:
                yield item


def _open_port_set(source: ScanData) -> set[int]:
    return {state.port for state in _iter_states(source) if state.open}


def diff(prev: ScanData, next: ScanData) -> DiffResult:  # noqa: A002
    """Return ports open in next but not prev (opened) and the reverse (closed)."""
    prev_set = _open_port_set(prev)
    next_set = _open_port_set(next)
    return DiffResult(opened=sorted(next_set - prev_set), closed=sorted(prev_set - next_set))


def open_ports(results: ScanData) -> list[int]:
    """Return the port numbers of every open port in results."""
    return [state.port for state in _iter_states(results) if state.open]


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"cannot encode {type(value).__name__}")


def _parse_time(raw: Any) -> datetime:
    if not raw:
        return _ZERO_TIME
    return datetime.fromisoformat(raw)


def _port_from_dict(data: dict[str, Any]) -> PortState:
    return PortState(
        port=int(data.get("port", 0)),
        protocol=data.get("protocol", "") or "",
        open=bool(data.get("open", False)),
        service=data.get("service", "") or "",
        host=data.get("host", "") or "",
    )


def _result_from_dict(data: dict[str, Any]) -> ScanResult:
    return ScanResult(
        host=data.get("host", "") or "",
        timestamp=_parse_time(data.get("timestamp")),
        ports=[_port_from_dict(p) for p in data.get("ports") or []],
    )


def save(path: str | Path, snap: Snapshot) -> None:
    """Write snap to path as indented JSON."""
    text = json.dumps(asdict(snap), indent=2, default=_encode)
    Path(path).write_text(text + "\n", encoding="utf-8")


def load(path: str | Path) -> Snapshot | None:
    """Read a snapshot from path; return None if the file does not exist."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("snapshot: expected a JSON object")
    return Snapshot(
        host=data.get("host", "") or "",
        timestamp=_parse_time(data.get("timestamp")),
        results=[_result_from_dict(r) for r in data.get("results") or []],
    )