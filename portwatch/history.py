"""Persistent storage of scan records over time.

Each record is written to its own JSON file named after the host and the
UTC time of the scan.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from portwatch.baseline import sanitize
from portwatch.scanner import PortState


@dataclass
class Entry:
    """A single historical scan record."""

    timestamp: datetime
    host: str
    results: list[PortState] = field(default_factory=list)


class History:
    """A directory of scan records."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def record(self, host: str, results: Iterable[PortState]) -> Path:
        """Write a new record for host and return the path of its file."""
        entry = Entry(timestamp=datetime.now(timezone.utc), host=host, results=list(results))
        stamp = entry.timestamp.strftime("%Y%m%dT%H%M%SZ")
        path = self.directory / f"{sanitize(host)}_{stamp}.json"
        data = {
            "timestamp": entry.timestamp.isoformat(),
            "host": entry.host,
            "results": [asdict(state) for state in entry.results],
        }
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return path