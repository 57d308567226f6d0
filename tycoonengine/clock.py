from __future__ import annotations

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Wall time in milliseconds."""

    @abstractmethod
    def now(self) -> float: ...


class SystemClock(Clock):
    def now(self) -> float:
        return time.time() * 1000.0


class ManualClock(Clock):
    """Clock advanced explicitly; used by simulations and tests."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        self._now += delta_ms
        return self._now

    def set(self, now_ms: float) -> None:
        self._now = now_ms
