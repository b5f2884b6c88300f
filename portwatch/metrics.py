"""In-memory scan statistics and a human-readable summary of them."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TextIO

_COLUMN_PADDING = 2


@dataclass(frozen=True)
class MetricsSnapshot:
    """A point-in-time view of collected metrics."""

    total_scans: int = 0
    open_ports: int = 0
    last_scan_at: datetime | None = None
    last_duration: timedelta = timedelta(0)


class Collector:
    """Accumulates scan metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = MetricsSnapshot()

    def record(self, open_ports: int, duration: timedelta | float) -> None:
        """Record one scan run; duration is a timedelta or seconds."""
        if not isinstance(duration, timedelta):
            duration = timedelta(seconds=duration)
        with self._lock:
            self._state = MetricsSnapshot(
                total_scans=self._state.total_scans + 1,
                open_ports=open_ports,
                last_scan_at=datetime.now(),
                last_duration=duration,
            )

    def snapshot(self) -> MetricsSnapshot:
        """Return the current metrics."""
        with self._lock:
            return self._state

    def reset(self) -> None:
        """Clear all accumulated metrics."""
        with self._lock:
            self._state = MetricsSnapshot()


def _with_fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(duration: timedelta) -> str:
    """Render duration compactly, e.g. ``42ms``, ``1.5s`` or ``1h2m3s``."""
    nanos = ((duration.days * 86400 + duration.seconds) * 1_000_000 + duration.microseconds) * 1000
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos == 0:
        return "0s"
    if nanos < 1_000_000_000:
        if nanos < 1_000:
            unit, scale = "ns", 1
        elif nanos < 1_000_000:
            unit, scale = "µs", 1_000
        else:
            unit, scale = "ms", 1_000_000
        return f"{sign}{_with_fraction(nanos, scale)}{unit}"
    hours, rest = divmod(nanos, 3600 * 1_000_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000_000)
    seconds = _with_fraction(rest, 1_000_000_000) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def print_metrics(stream: TextIO, snapshot: MetricsSnapshot) -> None:
    """Write a two-column, aligned summary of snapshot to stream."""
    last_scan = (
        "-" if snapshot.last_scan_at is None else snapshot.last_scan_at.strftime("%Y-%m-%d %H:%M:%S")
    )
    rows = [
        ("Metric", "Value"),
        ("------", "-----"),
        ("Total scans", str(snapshot.total_scans)),
        ("Open ports (last)", str(snapshot.open_ports)),
        ("Last scan", last_scan),
        ("Last duration", format_duration(snapshot.last_duration)),
    ]
    width = max(len(name) for name, _ in rows) + _COLUMN_PADDING
    stream.write("".join(f"{name.ljust(width)}{value}\n" for name, value in rows))