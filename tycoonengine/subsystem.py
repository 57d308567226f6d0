from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tycoonengine.state import EconomyState


class Subsystem(ABC):
    """A tick-driven engine. Returns the money gained during the tick."""

    @abstractmethod
    def tick(self, state: EconomyState, delta_ms: float, now_ms: float) -> float: ...


class SimulationProxy(ABC):
    """Bounded approximation of a subsystem over a long elapsed gap."""

    @abstractmethod
    def catch_up(self, state: EconomyState, gap_ms: float) -> float: ...
