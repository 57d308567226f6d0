from __future__ import annotations

import math

from tycoonengine.clock import ManualClock
from tycoonengine.definition import GameDefinition
from tycoonengine.investment import InvestmentStatus
from tycoonengine.metrics import MetricsCollector
from tycoonengine.persistence import MemoryStore
from tycoonengine.report import SimulationReport, build_report
from tycoonengine.runtime import GameRuntime
from tycoonengine.strategy import Strategy
from tycoonengine.terminal import SimulationContext, TerminalCondition

MAX_TICKS = 10_000_000


class Simulation:
    """Orchestrates a headless playthrough of a game definition."""

    def __init__(
        self,
        definition: GameDefinition,
        strategy: Strategy,
        terminal: TerminalCondition,
        tick_resolution_ms: float = 1000.0,
        snapshot_interval: float | None = None,
    ) -> None:
        self.definition = definition
        self.strategy = strategy
        self.terminal = terminal
        self.tick_resolution_ms = tick_resolution_ms

        self.clock = ManualClock()
        self.store = MemoryStore()
        self.runtime = GameRuntime(definition, store=self.store, clock=self.clock)
        self.collector = MetricsCollector(
            snapshot_interval=(
                snapshot_interval
                if snapshot_interval is not None
                else tick_resolution_ms / 1000.0
            ),
            investment_ids=[i.id for i in definition.investments],
        )
        self.context = SimulationContext()
        self._run_started: float = 0.0

    def run(self) -> SimulationReport:
        achievements_seen: set[str] = set()
        tick_count = 0

        while not self.terminal.is_met(self.runtime.state, self.context):
            tick_count += 1
            if tick_count > MAX_TICKS:
                break

            # 1. Advance time
            self.clock.advance(self.tick_resolution_ms)
            self.runtime.tick(self.tick_resolution_ms)
            now = self.clock.now() / 1000.0
            self.context.time_elapsed = now

            # 2. Manual restarts
            state = self.runtime.state
            for index, inv in enumerate(state.investments):
                if (
                    inv.level > 0
                    and inv.status is InvestmentStatus.IDLE
                    and self.strategy.should_start(state, index)
                ):
                    self.runtime.start_production(index)

            # 3. Purchases
            affordable = self.runtime.get_affordable_purchases()
            for option in self.strategy.decide_purchases(state, affordable):
                money_before = state.money
                if self.runtime.execute_purchase(option):
                    self.collector.record_purchase(
                        state, now, option, money_before - state.money
                    )
                    self.context.last_purchase_time = now
                    self.context.total_purchases += 1

            # 4. Retirement
            if self.strategy.should_retire(state, self.runtime.prestige_preview()):
                result = self.runtime.retire()
                if result.success:
                    self.collector.record_retire(now, result, now - self._run_started)
                    self._run_started = now
                    self.context.retirements += 1
                    state = self.runtime.state

            # 5. New achievements
            for aid in sorted(state.achievements_unlocked - achievements_seen):
                achievements_seen.add(aid)
                self.collector.record_achievement(now, aid)

            # 6. Record metrics
            self.collector.record_tick(state, now)

            # Safety: NaN/Inf detection
            if math.isnan(state.money) or math.isinf(state.money):
                return self._build_report("Aborted: NaN/Inf detected")

        outcome = (
            "Terminal condition met"
            if self.terminal.is_met(self.runtime.state, self.context)
            else "Max ticks reached"
        )
        return self._build_report(outcome)

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.runtime.state
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            terminal_description=self.terminal.describe(),
            outcome=outcome,
            total_time=self.context.time_elapsed,
            final_money=state.money,
            lifetime_money=state.lifetime_money(),
        )
