"""Run a job periodically until told to stop."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

Job = Callable[[threading.Event], object]


class Scheduler:
    """Runs a job immediately and then at a fixed interval (seconds)."""

    def __init__(
        self, interval: float, job: Job, logger: logging.Logger | None = None
    ) -> None:
        if interval <= 0:
            raise ValueError("scheduler: interval must be positive")
        self.interval = interval
        self.job = job
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def _execute(self, stop: threading.Event) -> None:
        try:
            self.job(stop)
        except Exception as exc:  # noqa: BLE001 - a failing job must not stop the loop
            self.logger.error("scheduler: job error: %s", exc)

    def run(self, stop: threading.Event) -> int:
        """Block until stop is set, running the job on every tick; return the run count."""
        self.logger.info("scheduler: starting with interval %ss", self.interval)
        self._execute(stop)
        runs = 1
        next_tick = time.monotonic() + self.interval
        while True:
            if stop.wait(max(0.0, next_tick - time.monotonic())):
                self.logger.info("scheduler: stopped")
                return runs
            self._execute(stop)
            runs += 1
            next_tick += self.interval
            now = time.monotonic()
            while next_tick <= now:
                next_tick += self.interval