"""Resolve host names to IP addresses."""

from __future__ import annotations

import ipaddress
import socket
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from datetime import datetime, timezone

DEFAULT_TIMEOUT = 5.0


class ResolveError(Exception):
    """Raised when a host name cannot be resolved."""


@dataclass
class Resolution:
    """The addresses a host name resolved to."""

    host: str
    addresses: list[str] = field(default_factory=list)
    resolved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _lookup(host: str) -> list[str]:
    infos = socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    return list(dict.fromkeys(info[4][0] for info in infos))


class Resolver:
    """Resolves host names with a bounded wait."""

    def __init__(self, timeout: float = 0) -> None:
        self.timeout = timeout if timeout > 0 else DEFAULT_TIMEOUT

    def resolve(self, host: str) -> Resolution:
        """Return the addresses of host; an IP address is returned as-is."""
        try:
            ip = ipaddress.ip_address(host)
        except ValueError:
            pass
        else:
            return Resolution(host=host, addresses=[str(ip)])

        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(_lookup, host)
            addresses = future.result(timeout=self.timeout)
        except FutureTimeout as exc:
            raise ResolveError(f'resolve "{host}": lookup timed out') from exc
        except (OSError, UnicodeError) as exc:
            raise ResolveError(f'resolve "{host}": {exc}') from exc
        finally:
            executor.shutdown(wait=False)
        return Resolution(host=host, addresses=addresses)

    def primary(self, host: str) -> str:
        """Return the first resolved address of host."""
        result = self.resolve(host)
        if not result.addresses:
            raise ResolveError(f'resolve "{host}": no addresses returned')
        return result.addresses[0]