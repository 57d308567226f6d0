from __future__ import annotations

from typing import TYPE_CHECKING

from tycoonengine.investment import InvestmentState
from tycoonengine.specialist import SpecialistKind, SpecialistState

if TYPE_CHECKING:
    from tycoonengine.definition import GameDefinition


class EconomyState:
    """Mutable root aggregate holding all economy state."""

    def __init__(self, definition: GameDefinition, now_ms: float = 0.0) -> None:
        self.money: float = definition.config.starting_money
        self.run_earnings: float = 0.0
        self.prior_money: float = 0.0
        self.start_time_ms: float = now_ms
        self.last_save_time_ms: float = now_ms
        self.investments: list[InvestmentState] = [
            InvestmentState() for _ in definition.investments
        ]
        self.specialists: dict[SpecialistKind, SpecialistState] = {}
        self.upgrades_bought: set[str] = set()
        self.achievements_unlocked: set[str] = set()

        last_index = max(len(definition.investments) - 1, 0)
        for kind in SpecialistKind:
            self.specialists[kind] = SpecialistState(
                kind=kind, target=min(kind.default_target, last_index)
            )

    def investment(self, index: int) -> InvestmentState:
        return self.investments[index]

    def specialist(self, kind: SpecialistKind) -> SpecialistState:
        return self.specialists[kind]

    def level(self, index: int) -> int:
        return self.investments[index].level

    def min_level(self) -> int:
        if not self.investments:
            return 0
        return min(inv.level for inv in self.investments)

    def earn(self, amount: float) -> None:
        """Credit money to both the balance and this run's earnings."""
        self.money += amount
        self.run_earnings += amount

    def lifetime_money(self) -> float:
        return self.prior_money + self.run_earnings

    def has_upgrade(self, id: str) -> bool:
        return id in self.upgrades_bought

    def has_achievement(self, id: str) -> bool:
        return id in self.achievements_unlocked
