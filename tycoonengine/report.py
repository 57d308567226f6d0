from __future__ import annotations

from dataclasses import dataclass, field

from tycoonengine.metrics import (
    AchievementEvent,
    LevelSnapshot,
    MetricsCollector,
    MoneySnapshot,
    PurchaseEvent,
    RetireEvent,
)


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    terminal_description: str = ""
    outcome: str = ""
    total_time: float = 0.0
    final_money: float = 0.0
    lifetime_money: float = 0.0

    # Raw metrics
    money_snapshots: list[MoneySnapshot] = field(default_factory=list)
    level_snapshots: list[LevelSnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    achievements: list[AchievementEvent] = field(default_factory=list)
    retirements: list[RetireEvent] = field(default_factory=list)

    # Derived metrics
    achievement_times: dict[str, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def achievement_time(self, achievement_id: str) -> float | None:
        return self.achievement_times.get(achievement_id)

    def money_series(self) -> list[tuple[float, float]]:
        return [(s.time, s.money) for s in self.money_snapshots]

    def income_series(self) -> list[tuple[float, float]]:
        return [(s.time, s.income_rate) for s in self.money_snapshots]

    def level_series(self, investment_id: str) -> list[tuple[float, int]]:
        return [
            (s.time, s.level)
            for s in self.level_snapshots
            if s.investment_id == investment_id
        ]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    terminal_description: str,
    outcome: str,
    total_time: float,
    final_money: float = 0.0,
    lifetime_money: float = 0.0,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics."""
    # First unlock wins; achievements survive retirement so they never repeat
    achievement_times: dict[str, float] = {}
    for event in collector.achievements:
        achievement_times.setdefault(event.achievement_id, event.time)

    gaps = _purchase_gaps(collector.purchases)
    max_gap = max(gaps, default=0.0)
    mean_gap = sum(gaps) / len(gaps) if gaps else 0.0
    ppm = len(collector.purchases) * 60.0 / total_time if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        terminal_description=terminal_description,
        outcome=outcome,
        total_time=total_time,
        final_money=final_money,
        lifetime_money=lifetime_money,
        money_snapshots=collector.money_snapshots,
        level_snapshots=collector.level_snapshots,
        purchases=collector.purchases,
        achievements=collector.achievements,
        retirements=collector.retirements,
        achievement_times=achievement_times,
        purchase_gaps=gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
    )


def _purchase_gaps(purchases: list[PurchaseEvent]) -> list[float]:
    """Seconds waited before each purchase, the first measured from t=0."""
    times = sorted(p.time for p in purchases)
    return [later - earlier for earlier, later in zip([0.0] + times, times)]
