from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tycoonengine.state import EconomyState
    from tycoonengine.subsystem import SimulationProxy

logger = logging.getLogger(__name__)


class OfflineSimulator:
    """Approximates a long elapsed gap without replaying every tick."""

    def __init__(self, proxies: list[SimulationProxy], cap_ms: float) -> None:
        self.proxies = proxies
        self.cap_ms = cap_ms

    def catch_up(self, state: EconomyState, gap_ms: float) -> float:
        """Credit the gap's estimated earnings. Returns the amount credited."""
        if gap_ms <= 0:
            return 0.0
        gap = min(gap_ms, self.cap_ms)

        credited = 0.0
        for proxy in self.proxies:
            credited += proxy.catch_up(state, gap)
        if credited > 0:
            state.earn(credited)
        logger.info("Offline catch-up over %.0f ms credited %.2f", gap, credited)
        return credited
