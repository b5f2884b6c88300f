"""Write human-readable summaries of port-change diffs to text streams.

Transport is left to the caller: any object with a ``write`` method works.
"""

from __future__ import annotations

from typing import Any, TextIO

from portwatch.snapshot import DiffResult


def _port(entry: Any) -> int:
    return getattr(entry, "port", entry)


class Notifier:
    """Formats a diff summary and writes it to one stream."""

    def __init__(self, stream: TextIO) -> None:
        if stream is None:
            raise ValueError("notifier: stream must not be None")
        self.stream = stream

    def notify(self, host: str, diff: DiffResult) -> None:
        """Write a summary of diff for host; write nothing if there are no changes."""
        if not diff.opened and not diff.closed:
            return
        lines = [f"[portwatch] changes detected on {host}"]
        if diff.opened:
            lines.append(f"  opened ports ({len(diff.opened)}):")
            lines.extend(f"    + {_port(entry)}" for entry in diff.opened)
        if diff.closed:
            lines.append(f"  closed ports ({len(diff.closed)}):")
            lines.extend(f"    - {_port(entry)}" for entry in diff.closed)
        self.stream.write("\n".join(lines) + "\n")


class MultiNotifier:
    """Fans a notification out to several streams."""

    def __init__(self, *streams: TextIO) -> None:
        for index, stream in enumerate(streams):
            if stream is None:
                raise ValueError(f"notifier: stream at index {index} is None")
        self.notifiers = [Notifier(stream) for stream in streams]

    def notify(self, host: str, diff: DiffResult) -> None:
        """Notify every stream; re-raise the first failure after trying them all."""
        first: Exception | None = None
        for notifier in self.notifiers:
            try:
                notifier.notify(host, diff)
            except Exception as exc:  # noqa: BLE001 - later streams still get notified
                if first is None:
                    first = exc
        if first is not None:
            raise first