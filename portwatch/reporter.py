"""Human-readable scan reports written to a text stream."""

from __future__ import annotations

from datetime import datetime
from typing import Any, TextIO

from portwatch.snapshot import DiffResult


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


def _describe(entry: Any) -> str:
    port = getattr(entry, "port", entry)
    protocol = getattr(entry, "protocol", "tcp")
    service = getattr(entry, "service", "")
    return f"{port}/{protocol} ({service})"


class Reporter:
    """Writes summaries of scan diffs."""

    def __init__(self, stream: TextIO) -> None:
        if stream is None:
            raise ValueError("reporter: stream must not be None")
        self.stream = stream

    def report(self, diff: DiffResult) -> None:
        """Write a timestamped summary of diff."""
        lines = [f"[{_rfc3339(datetime.now().astimezone())}] Port scan report"]
        if not diff.opened and not diff.closed:
            lines.append("  No changes detected.")
        if diff.opened:
            lines.append(f"  Opened ports ({len(diff.opened)}):")
            lines.extend(f"    + {_describe(entry)}" for entry in diff.opened)
        if diff.closed:
            lines.append(f"  Closed ports ({len(diff.closed)}):")
            lines.extend(f"    - {_describe(entry)}" for entry in diff.closed)
        self.stream.write("\n".join(lines) + "\n")