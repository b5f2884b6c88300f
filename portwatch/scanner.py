"""Probe TCP ports on a host and report whether they are open.

Each port is dialled in turn with a configurable timeout so that filtered
ports cannot block a scan indefinitely.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable


@dataclass
class PortState:
    """The observed state of a single port."""

    port: int
    protocol: str = "tcp"
    open: bool = False
    service: str = ""
    host: str = ""


@dataclass
class ScanResult:
    """The outcome of scanning a set of ports on one host."""

    host: str
    timestamp: datetime
    ports: list[PortState] = field(default_factory=list)

    def open_ports(self) -> list[PortState]:
        """Return only the ports that were found open."""
        return [state for state in self.ports if state.open]


class Scanner:
    """Checks TCP ports on a host by attempting to connect to them."""

    def __init__(self, timeout: float | None = None) -> None:
        # A non-positive timeout means "no timeout", as a blocking dial.
        self.timeout = timeout

    def scan(self, host: str, ports: Iterable[int]) -> ScanResult:
        """Dial every port on host and return the collected states."""
        if not host:
            raise ValueError("host must not be empty")

        result = ScanResult(host=host, timestamp=datetime.now(timezone.utc))
        result.ports = [
            PortState(port=port, protocol="tcp", open=self._is_open(host, port), host=host)
            for port in ports
        ]
        return result

    def _is_open(self, host: str, port: int) -> bool:
        timeout = self.timeout if self.timeout and self.timeout > 0 else None
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except (OSError, OverflowError, ValueError):
            return False