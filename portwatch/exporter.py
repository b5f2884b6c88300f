"""Scan counters and their export as JSON."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, TextIO

from portwatch.scanner import PortState


class ScanMetrics:
    """Counts scans and the open and closed ports seen in the latest one."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_scans = 0
        self._open_ports = 0
        self._closed_ports = 0
        self._last_scan_time: datetime | None = None

    def record(self, results: Iterable[PortState]) -> None:
        """Record one scan made of results."""
        states = list(results)
        open_count = sum(1 for state in states if state.open)
        with self._lock:
            self._total_scans += 1
            self._open_ports = open_count
            self._closed_ports = len(states) - open_count
            self._last_scan_time = datetime.now(timezone.utc)

    def _capture(self) -> "ExportSnapshot":
        with self._lock:
            return ExportSnapshot(
                total_scans=self._total_scans,
                open_ports=self._open_ports,
                closed_ports=self._closed_ports,
                last_scan_time=self._last_scan_time,
                exported_at=datetime.now(timezone.utc),
            )


@dataclass(frozen=True)
class ExportSnapshot:
    """An exported view of the current metrics."""

    total_scans: int
    open_ports: int
    closed_ports: int
    last_scan_time: datetime | None
    exported_at: datetime

    def _to_dict(self) -> dict:
        return {
            "total_scans": self.total_scans,
            "open_ports": self.open_ports,
            "closed_ports": self.closed_ports,
            "last_scan_time": (
                None if self.last_scan_time is None else self.last_scan_time.isoformat()
            ),
            "exported_at": self.exported_at.isoformat(),
        }


class Exporter:
    """Writes snapshots of a ScanMetrics as indented JSON."""

    def __init__(self, metrics: ScanMetrics) -> None:
        if metrics is None:
            raise ValueError("metrics: Exporter requires metrics")
        self.metrics = metrics

    def export(self, stream: TextIO) -> ExportSnapshot:
        """Write the current metrics to stream and return what was written."""
        snap = self.metrics._capture()
        stream.write(json.dumps(snap._to_dict(), indent=2) + "\n")
        return snap