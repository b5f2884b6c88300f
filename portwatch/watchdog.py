"""Coordinate one full port-watch cycle: scan, diff, notify and record.

A Watchdog wires together the scanner, snapshot file, notifiers, history
recorder and metrics so that a scheduler only needs to call ``run`` per tick.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Sequence

from portwatch import snapshot
from portwatch.alert import Notifier as AlertNotifier
from portwatch.config import Config
from portwatch.exporter import ScanMetrics
from portwatch.history import History
from portwatch.reporter import Reporter
from portwatch.scanner import PortState, Scanner
from portwatch.snapshot import DiffResult

Notify = Callable[[DiffResult], object]


class WatchdogError(Exception):
    """Raised when a watchdog cannot be built or a scan cycle fails."""


class Watchdog:
    """Performs a full scan cycle for a set of hosts and ports."""

    def __init__(
        self,
        scanner: Scanner | None,
        logger: logging.Logger | None,
        *,
        snapshot_path: str | Path | None = None,
        notifiers: Sequence[Notify] = (),
        history: History | None = None,
        metrics: ScanMetrics | None = None,
    ) -> None:
        if scanner is None:
            raise WatchdogError("watchdog: scanner is required")
        if logger is None:
            raise WatchdogError("watchdog: logger is required")
        self.scanner = scanner
        self.logger = logger
        self.snapshot_path = None if snapshot_path is None else Path(snapshot_path)
        self.notifiers = list(notifiers)
        self.history = history
        self.metrics = metrics

    def run(self, hosts: Iterable[str] | None, ports: Iterable[int] | None) -> list[PortState]:
        """Execute one cycle and return the port states that were scanned."""
        host_list = list(hosts or ())
        port_list = list(ports or ())
        try:
            scans = [self.scanner.scan(host, port_list) for host in host_list]
        except (ValueError, OSError) as exc:
            raise WatchdogError(f"watchdog: scan failed: {exc}") from exc
        results = [state for scan in scans for state in scan.ports]

        if self.metrics is not None:
            self.metrics.record(results)

        if self.snapshot_path is not None:
            self._compare_and_save(host_list, scans)

        if self.history is not None and results:
            try:
                self.history.record(results[0].host, results)
            except OSError as exc:
                self.logger.warning("watchdog: history record error: %s", exc)

        self.logger.info("watchdog: cycle complete, %d results", len(results))
        return results

    def _compare_and_save(self, hosts: list[str], scans: list) -> None:
        try:
            prev = snapshot.load(self.snapshot_path)
        except (OSError, ValueError):
            prev = None
        changes = snapshot.diff(prev, scans)
        for notify in self.notifiers:
            try:
                notify(changes)
            except Exception as exc:  # noqa: BLE001 - a failed notification is only logged
                self.logger.warning("watchdog: notify error: %s", exc)
        current = snapshot.Snapshot.create(hosts[0] if hosts else "", scans)
        try:
            snapshot.save(self.snapshot_path, current)
        except OSError as exc:
            self.logger.warning("watchdog: snapshot save error: %s", exc)


def from_config(cfg: Config | None, logger: logging.Logger | None) -> Watchdog:
    """Build a ready-to-use Watchdog from application configuration."""
    if cfg is None:
        raise WatchdogError("watchdog: config is nil")
    alerts = AlertNotifier(sys.stdout)
    reporter = Reporter(sys.stdout)
    history = None
    if cfg.history_dir:
        try:
            history = History(cfg.history_dir)
        except OSError as exc:
            raise WatchdogError(f"watchdog: history: {exc}") from exc
    return Watchdog(
        Scanner(cfg.timeout),
        logger,
        snapshot_path=cfg.snapshot_path or None,
        notifiers=[alerts.notify, reporter.report],
        history=history,
        metrics=ScanMetrics(),
    )