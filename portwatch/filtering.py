"""Port filtering for scan results.

Exclusions always win; a non-empty inclusion list keeps only its ports.
"""

from __future__ import annotations

from typing import Iterable

from portwatch.scanner import PortState


class PortFilter:
    """Applies inclusion and exclusion port lists to scan results."""

    def __init__(
        self, include: Iterable[int] | None = None, exclude: Iterable[int] | None = None
    ) -> None:
        self.include = frozenset(include or ())
        self.exclude = frozenset(exclude or ())

    def _allows(self, port: int) -> bool:
        if port in self.exclude:
            return False
        return not self.include or port in self.include

    def apply(self, results: Iterable[PortState]) -> list[PortState]:
        """Return the results whose ports pass the filter."""
        return [result for result in results if self._allows(result.port)]