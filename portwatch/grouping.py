"""A thread-safe registry that organises monitored hosts into named groups.

Groups let shared configuration, labels or alert policies apply to a set of
hosts without repeating them for each host.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class Group:
    """A named collection of hosts."""

    name: str
    hosts: list[str] = field(default_factory=list)


class Registry:
    """Maps group names to their host lists."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._groups: dict[str, list[str]] = {}

    def add(self, name: str, *args: str) -> None:
        """Register the given hosts under name, merging with existing entries."""
        with self._lock:
            self._groups.setdefault(name, []).extend(args)

    def get(self, name: str) -> list[str] | None:
        """Return a copy of the hosts in name, or None if the group does not exist."""
        with self._lock:
            hosts = self._groups.get(name)
            return None if hosts is None else list(hosts)

    def delete(self, name: str) -> None:
        """Remove a group; removing an unknown group does nothing."""
        with self._lock:
            self._groups.pop(name, None)

    def all(self) -> list[Group]:
        """Return an independent copy of every group."""
        with self._lock:
            return [Group(name=name, hosts=list(hosts)) for name, hosts in self._groups.items()]

    def hosts(self) -> list[str]:
        """Return every distinct host across all groups, in first-seen order."""
        with self._lock:
            return list(dict.fromkeys(h for hosts in self._groups.values() for h in hosts))

    def groups_for(self, host: str) -> list[str]:
        """Return the names of all groups that contain host."""
        with self._lock:
            return [name for name, hosts in self._groups.items() if host in hosts]

    def in_group(self, name: str, host: str) -> bool:
        """Report whether host belongs to the named group."""
        with self._lock:
            return host in self._groups.get(name, ())