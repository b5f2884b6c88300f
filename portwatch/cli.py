"""Command-line entry point: scan the configured hosts and report changes."""

from __future__ import annotations

import sys
from typing import Sequence

from portwatch import config, snapshot
from portwatch.alert import Notifier
from portwatch.config import ConfigError
from portwatch.scanner import Scanner

DEFAULT_CONFIG_PATH = "portwatch.toml"


def run(argv: Sequence[str] | None = None) -> None:
    """Scan once, compare with the saved snapshot, alert, and save the new snapshot."""
    args = sys.argv[1:] if argv is None else list(argv)
    cfg_path = args[0] if args else DEFAULT_CONFIG_PATH

    try:
        cfg = config.load(cfg_path)
    except (OSError, ValueError) as exc:
        print(f"warn: could not load config ({exc}), using defaults", file=sys.stderr)
        cfg = config.default_config()

    try:
        cfg.validate()
    except ConfigError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    scanner = Scanner(cfg.timeout)
    scans = []
    for host in cfg.hosts:
        try:
            scans.append(scanner.scan(host, cfg.ports))
        except ValueError as exc:
            print(f"warn: scan failed for {host}: {exc}", file=sys.stderr)

    current = snapshot.Snapshot.create(",".join(cfg.hosts), scans)

    try:
        prev = snapshot.load(cfg.snapshot_path)
    except (OSError, ValueError):
        prev = None
    if prev is None:
        print("no previous snapshot found, saving baseline")
        snapshot.save(cfg.snapshot_path, current)
        return

    Notifier(sys.stdout).notify(snapshot.diff(prev, scans))
    snapshot.save(cfg.snapshot_path, current)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    try:
        run(argv)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())