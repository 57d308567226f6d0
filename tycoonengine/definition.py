from __future__ import annotations

from dataclasses import dataclass, field

from tycoonengine.achievement import AchievementDef
from tycoonengine.investment import InvestmentDef
from tycoonengine.upgrade import UpgradeDef


@dataclass
class GameConfig:
    """Top-level game configuration."""

    name: str = "Untitled"
    tick_interval_ms: float = 50.0
    autosave_interval_ms: float = 10_000.0
    offline_cap_ms: float = 24 * 60 * 60 * 1000.0
    offline_min_gap_ms: float = 1000.0
    starting_money: float = 5.0


@dataclass
class GameDefinition:
    """Complete static definition of a tycoon game."""

    config: GameConfig = field(default_factory=GameConfig)
    investments: list[InvestmentDef] = field(default_factory=list)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._achievements_by_id = {a.id: a for a in self.achievements}

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def index_of(self, investment_id: str) -> int:
        for i, inv in enumerate(self.investments):
            if inv.id == investment_id:
                return i
        raise KeyError(investment_id)

    def validate(self) -> list[str]:
        """Check for common definition errors. Returns list of error messages."""
        errors: list[str] = []
        count = len(self.investments)

        if count == 0:
            errors.append("Definition has no investments")

        # Check for duplicate IDs
        for label, ids in (
            ("investment", [i.id for i in self.investments]),
            ("upgrade", [u.id for u in self.upgrades]),
            ("achievement", [a.id for a in self.achievements]),
        ):
            seen: set[str] = set()
            for id in ids:
                if id in seen:
                    errors.append(f"Duplicate {label} ID: {id!r}")
                seen.add(id)

        for inv in self.investments:
            if inv.base_cost <= 0:
                errors.append(f"Investment {inv.id!r} has non-positive base_cost")
            if inv.cost_growth <= 0:
                errors.append(f"Investment {inv.id!r} has non-positive cost_growth")
            if inv.base_duration_ms <= 0:
                errors.append(
                    f"Investment {inv.id!r} has non-positive base_duration_ms"
                )

        # Check target indices
        for u in self.upgrades:
            if u.target is not None and not 0 <= u.target < count:
                errors.append(
                    f"Upgrade {u.id!r} targets unknown investment index {u.target}"
                )
            if u.multiplier <= 0:
                errors.append(f"Upgrade {u.id!r} has non-positive multiplier")

        for a in self.achievements:
            if a.target is not None and not 0 <= a.target < count:
                errors.append(
                    f"Achievement {a.id!r} targets unknown investment index {a.target}"
                )
            if not (a.revenue_reward or a.speed_reward):
                errors.append(
                    f"Achievement {a.id!r} reward {a.reward} must be > 1 or in (0, 1)"
                )

        if self.config.tick_interval_ms <= 0:
            errors.append("GameConfig.tick_interval_ms must be positive")

        return errors
