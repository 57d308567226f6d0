from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tycoonengine.prestige import PrestigeResult
    from tycoonengine.purchase import PurchaseOption
    from tycoonengine.state import EconomyState


@dataclass
class MoneySnapshot:
    time: float
    money: float
    lifetime_money: float
    income_rate: float


@dataclass
class LevelSnapshot:
    time: float
    investment_id: str
    level: int
    manager_level: int


@dataclass
class PurchaseEvent:
    time: float
    purchase_id: str
    cost_paid: float
    money_after: float


@dataclass
class AchievementEvent:
    time: float
    achievement_id: str


@dataclass
class RetireEvent:
    time: float
    prior_money: float
    multiplier_before: float
    multiplier_after: float
    run_duration: float


class MetricsCollector:
    """Collects simulation metrics at configurable intervals (seconds)."""

    def __init__(
        self,
        snapshot_interval: float = 1.0,
        investment_ids: list[str] | None = None,
    ) -> None:
        self.snapshot_interval = snapshot_interval
        self.investment_ids = investment_ids or []
        self._last_snapshot_time: float | None = None
        self._last_lifetime: float = 0.0

        self.money_snapshots: list[MoneySnapshot] = []
        self.level_snapshots: list[LevelSnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.achievements: list[AchievementEvent] = []
        self.retirements: list[RetireEvent] = []

    def record_tick(self, state: EconomyState, time: float) -> None:
        """Record a snapshot if enough time has passed."""
        if (
            self._last_snapshot_time is None
            or time - self._last_snapshot_time >= self.snapshot_interval
        ):
            self._take_snapshot(state, time)

    def record_purchase(
        self,
        state: EconomyState,
        time: float,
        option: PurchaseOption,
        cost_paid: float,
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=time,
                purchase_id=option.id,
                cost_paid=cost_paid,
                money_after=state.money,
            )
        )

    def record_achievement(self, time: float, achievement_id: str) -> None:
        self.achievements.append(
            AchievementEvent(time=time, achievement_id=achievement_id)
        )

    def record_retire(
        self, time: float, result: PrestigeResult, run_duration: float
    ) -> None:
        self.retirements.append(
            RetireEvent(
                time=time,
                prior_money=result.prior_money,
                multiplier_before=result.multiplier_before,
                multiplier_after=result.multiplier_after,
                run_duration=run_duration,
            )
        )

    def _take_snapshot(self, state: EconomyState, time: float) -> None:
        lifetime = state.lifetime_money()
        if self._last_snapshot_time is None or time <= self._last_snapshot_time:
            rate = 0.0
        else:
            rate = (lifetime - self._last_lifetime) / (time - self._last_snapshot_time)
        self._last_snapshot_time = time
        self._last_lifetime = lifetime

        self.money_snapshots.append(
            MoneySnapshot(
                time=time,
                money=state.money,
                lifetime_money=lifetime,
                income_rate=max(rate, 0.0),
            )
        )
        for iid, inv in zip(self.investment_ids, state.investments):
            self.level_snapshots.append(
                LevelSnapshot(
                    time=time,
                    investment_id=iid,
                    level=inv.level,
                    manager_level=inv.manager_level,
                )
            )
