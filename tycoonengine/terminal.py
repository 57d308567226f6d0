from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tycoonengine.state import EconomyState


@dataclass
class SimulationContext:
    """Extra context available to terminal conditions during simulation."""

    time_elapsed: float = 0.0
    last_purchase_time: float = 0.0
    total_purchases: int = 0
    retirements: int = 0


class TerminalCondition(ABC):
    """Base class for simulation stopping conditions."""

    @abstractmethod
    def is_met(self, state: EconomyState, context: SimulationContext) -> bool: ...

    @abstractmethod
    def describe(self) -> str: ...


class _TimeTerminal(TerminalCondition):
    def __init__(self, seconds: float) -> None:
        self.seconds = seconds

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        return context.time_elapsed >= self.seconds

    def describe(self) -> str:
        return f"time({self.seconds})"


class _MoneyTerminal(TerminalCondition):
    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        return state.money >= self.threshold

    def describe(self) -> str:
        return f"money({self.threshold})"


class _AchievementTerminal(TerminalCondition):
    def __init__(self, achievement_id: str) -> None:
        self.achievement_id = achievement_id

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        return state.has_achievement(self.achievement_id)

    def describe(self) -> str:
        return f'achievement("{self.achievement_id}")'


class _LevelTerminal(TerminalCondition):
    """Met once the investment at `index` reaches `level`, or every one does."""

    def __init__(self, level: int, index: int | None = None) -> None:
        self.level = level
        self.index = index

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        if self.index is None:
            return state.min_level() >= self.level
        return state.level(self.index) >= self.level

    def describe(self) -> str:
        where = "all" if self.index is None else self.index
        return f"level({where}, {self.level})"


class _RetirementTerminal(TerminalCondition):
    def __init__(self, count: int) -> None:
        self.count = count

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        return context.retirements >= self.count

    def describe(self) -> str:
        return f"retirements({self.count})"


class _StallTerminal(TerminalCondition):
    def __init__(self, max_idle_seconds: float) -> None:
        self.max_idle_seconds = max_idle_seconds

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        gap = context.time_elapsed - context.last_purchase_time
        return gap >= self.max_idle_seconds

    def describe(self) -> str:
        return f"stall({self.max_idle_seconds})"


class _AnyTerminal(TerminalCondition):
    def __init__(self, conditions: list[TerminalCondition]) -> None:
        self.conditions = conditions

    def is_met(self, state: EconomyState, context: SimulationContext) -> bool:
        return any(c.is_met(state, context) for c in self.conditions)

    def describe(self) -> str:
        return " OR ".join(c.describe() for c in self.conditions)


class Terminal:
    """Factory for built-in terminal conditions."""

    @staticmethod
    def time(seconds: float) -> TerminalCondition:
        return _TimeTerminal(seconds)

    @staticmethod
    def money(threshold: float) -> TerminalCondition:
        return _MoneyTerminal(threshold)

    @staticmethod
    def achievement(achievement_id: str) -> TerminalCondition:
        return _AchievementTerminal(achievement_id)

    @staticmethod
    def level(level: int, index: int | None = None) -> TerminalCondition:
        return _LevelTerminal(level, index)

    @staticmethod
    def retirements(count: int = 1) -> TerminalCondition:
        return _RetirementTerminal(count)

    @staticmethod
    def stall(max_idle_seconds: float = 600) -> TerminalCondition:
        return _StallTerminal(max_idle_seconds)

    @staticmethod
    def any(*conditions: TerminalCondition) -> TerminalCondition:
        return _AnyTerminal(list(conditions))
