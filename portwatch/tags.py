"""Host tagging, so monitored hosts can be grouped and labelled.

Host names and tags are stripped of surrounding whitespace.
"""

from __future__ import annotations

from typing import Iterable, Mapping


class Tags:
    """Mapping of host to its tags."""

    def __init__(self, host_tags: Mapping[str, Iterable[str]] | None = None) -> None:
        self._host_tags: dict[str, list[str]] = {
            host.strip(): [tag.strip() for tag in tags]
            for host, tags in (host_tags or {}).items()
        }

    def get(self, host: str) -> list[str]:
        """Return the tags of host; an empty list if it has none."""
        return list(self._host_tags.get(host.strip(), ()))

    def has(self, host: str, tag: str) -> bool:
        """Report whether host carries tag."""
        return tag.strip() in self._host_tags.get(host.strip(), ())

    def hosts(self, tag: str) -> list[str]:
        """Return every host that carries tag."""
        wanted = tag.strip()
        return [host for host, tags in self._host_tags.items() if wanted in tags]

    def all(self) -> dict[str, list[str]]:
        """Return an independent copy of the host to tags mapping."""
        return {host: list(tags) for host, tags in self._host_tags.items()}