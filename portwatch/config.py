"""Load and validate portwatch configuration.

A configuration file is a JSON document such as::

    {
      "hosts": ["localhost", "192.168.1.1"],
      "ports": [22, 80, 443],
      "snapshot_path": "portwatch_snapshot.json",
      "timeout_seconds": 2
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_SNAPSHOT_PATH = "portwatch_snapshot.json"
DEFAULT_TIMEOUT_SECONDS = 2


class ConfigError(ValueError):
    """Raised when a configuration is malformed or out of range."""


@dataclass
class Config:
    """Top-level portwatch configuration."""

    hosts: list[str] = field(default_factory=list)
    ports: list[int] = field(default_factory=list)
    snapshot_path: str = ""
    timeout_seconds: int = 0
    history_dir: str = ""

    @property
    def timeout(self) -> float:
        """The per-port dial timeout in seconds."""
        return float(self.timeout_seconds)

    def validate(self) -> None:
        """Check required fields and fill in defaults for optional ones."""
        if not self.hosts:
            raise ConfigError("config: at least one host is required")
        if not self.ports:
            raise ConfigError("config: at least one port is required")
        if any(not 1 <= port <= 65535 for port in self.ports):
            raise ConfigError("config: port out of range (1-65535)")
        if self.timeout_seconds <= 0:
            self.timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        if not self.snapshot_path:
            self.snapshot_path = DEFAULT_SNAPSHOT_PATH


def default_config() -> Config:
    """Return a configuration populated with sensible defaults."""
    return Config(
        hosts=["localhost"],
        ports=[22, 80, 443, 8080],
        snapshot_path=DEFAULT_SNAPSHOT_PATH,
        timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _list_of(data: dict[str, Any], key: str, check, kind: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(check(item) for item in value):
        raise ConfigError(f"config: {key} must be a list of {kind}")
    return list(value)


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"config: {key} must be a string")
    return value


def _from_mapping(data: Any) -> Config:
    if not isinstance(data, dict):
        raise ConfigError("config: expected a JSON object")
    timeout = data.get("timeout_seconds")
    if timeout is None:
        timeout = 0
    elif not _is_int(timeout):
        raise ConfigError("config: timeout_seconds must be an integer")
    return Config(
        hosts=_list_of(data, "hosts", lambda h: isinstance(h, str), "strings"),
        ports=_list_of(data, "ports", _is_int, "integers"),
        snapshot_path=_string(data, "snapshot_path"),
        timeout_seconds=timeout,
        history_dir=_string(data, "history_dir"),
    )


def load(path: str | Path) -> Config:
    """Read a JSON config file from path and return it validated."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"config: decode {path}: {exc}") from exc
    cfg = _from_mapping(data)
    cfg.validate()
    return cfg