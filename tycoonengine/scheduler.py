from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tycoonengine.clock import Clock
    from tycoonengine.runtime import GameRuntime

logger = logging.getLogger(__name__)


class Scheduler:
    """Host timer that ticks a runtime at a fixed nominal interval.

    Each step passes the actually elapsed time, measured on *clock*.
    """

    def __init__(
        self,
        runtime: GameRuntime,
        clock: Clock,
        interval_ms: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.runtime = runtime
        self.clock = clock
        self.interval_ms = (
            interval_ms
            if interval_ms is not None
            else runtime.definition.config.tick_interval_ms
        )
        self._sleep = sleep
        self._last: float | None = None
        self._running = False
        self.ticks = 0

    def step(self) -> float:
        """Tick once with the time elapsed since the previous step."""
        now = self.clock.now()
        delta = 0.0 if self._last is None else max(0.0, now - self._last)
        self._last = now
        self.runtime.tick(delta)
        self.ticks += 1
        return delta

    def run(
        self, duration_ms: float | None = None, max_ticks: int | None = None
    ) -> int:
        """Tick until stopped, *duration_ms* passes or *max_ticks* run.

        Returns the number of ticks executed.
        """
        self._running = True
        started = self.clock.now()
        self._last = started
        executed = 0
        logger.info("Scheduler started (interval %.0f ms)", self.interval_ms)
        try:
            while self._running:
                if max_ticks is not None and executed >= max_ticks:
                    break
                if duration_ms is not None and self.clock.now() - started >= duration_ms:
                    break
                self._sleep(self.interval_ms / 1000.0)
                self.step()
                executed += 1
        finally:
            self._running = False
            logger.info("Scheduler stopped after %d ticks", executed)
        return executed

    def stop(self) -> None:
        self._running = False
