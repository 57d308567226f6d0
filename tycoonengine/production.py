from __future__ import annotations

import math
from typing import TYPE_CHECKING

from tycoonengine.investment import InvestmentStatus
from tycoonengine.subsystem import SimulationProxy, Subsystem

if TYPE_CHECKING:
    from tycoonengine.pipeline import ProductionPipeline
    from tycoonengine.state import EconomyState


class ProductionEngine(Subsystem, SimulationProxy):
    """Advances each investment's Idle/Running/ManagerCooldown cycle."""

    def __init__(self, pipeline: ProductionPipeline) -> None:
        self.pipeline = pipeline

    def tick(self, state: EconomyState, delta_ms: float, now_ms: float) -> float:
        gained = 0.0
        for index, inv in enumerate(state.investments):
            if inv.level == 0:
                continue

            if inv.status is InvestmentStatus.RUNNING:
                inv.progress_ms += delta_ms
                if inv.progress_ms >= self.pipeline.production_duration(state, index):
                    gained += self.pipeline.revenue_per_cycle(state, index)
                    inv.progress_ms = 0.0
                    if inv.automated:
                        inv.status = InvestmentStatus.MANAGER_COOLDOWN
                    else:
                        inv.status = InvestmentStatus.IDLE

            elif inv.status is InvestmentStatus.MANAGER_COOLDOWN:
                inv.progress_ms += delta_ms
                if inv.progress_ms >= self.pipeline.cooldown_duration(state, index):
                    inv.progress_ms = 0.0
                    inv.status = InvestmentStatus.RUNNING
        return gained

    def start(self, state: EconomyState, index: int) -> bool:
        """Manual start. Only an idle investment with levels can be started."""
        inv = state.investment(index)
        if inv.level <= 0 or inv.status is not InvestmentStatus.IDLE:
            return False
        inv.status = InvestmentStatus.RUNNING
        inv.progress_ms = 0.0
        return True

    def catch_up(self, state: EconomyState, gap_ms: float) -> float:
        """Whole automated cycles that fit in the gap, for managed investments.

        Per-investment state is left where it was.
        """
        total = 0.0
        for index, inv in enumerate(state.investments):
            if inv.level <= 0 or not inv.automated:
                continue
            cycle = self.pipeline.automated_cycle_duration(state, index)
            cycles = math.floor(gap_ms / cycle)
            if cycles > 0:
                total += cycles * self.pipeline.revenue_per_cycle(state, index)
        return total

    def progress(self, state: EconomyState, index: int) -> float:
        """Fraction of the current phase completed, in [0, 1]."""
        inv = state.investment(index)
        if inv.status is InvestmentStatus.RUNNING:
            phase = self.pipeline.production_duration(state, index)
        elif inv.status is InvestmentStatus.MANAGER_COOLDOWN:
            phase = self.pipeline.cooldown_duration(state, index)
        else:
            return 0.0
        return min(1.0, inv.progress_ms / phase)
