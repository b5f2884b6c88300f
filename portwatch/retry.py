"""Retry a callable a fixed number of times with a delay between attempts."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


class MaxAttemptsError(Exception):
    """Raised when every retry attempt has failed."""


@dataclass
class RetryConfig:
    """How many attempts to make and how long to wait between them (seconds)."""

    max_attempts: int = 3
    delay: float = 0.5


def default_config() -> RetryConfig:
    """Return three attempts with half a second between them."""
    return RetryConfig(max_attempts=3, delay=0.5)


class Doer:
    """Runs callables with retry logic."""

    def __init__(
        self,
        config: RetryConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config if config is not None else default_config()
        self._sleep = sleep

    def do(self, fn: Callable[[], T]) -> T:
        """Call fn until it returns without raising, up to max_attempts times."""
        attempts = self.config.max_attempts
        if attempts <= 0:
            raise MaxAttemptsError("max retry attempts reached")
        last: Exception | None = None
        for attempt in range(attempts):
            try:
                return fn()
            except Exception as exc:  # noqa: BLE001 - any failure triggers a retry
                last = exc
            if attempt < attempts - 1:
                self._sleep(self.config.delay)
        raise MaxAttemptsError("max retry attempts reached") from last