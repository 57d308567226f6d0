from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DAY_MS = 24 * 60 * 60 * 1000
ACTIVE_WINDOW_MS = 60 * 60 * 1000

EARLY_SPECIALIST_COST = 10_000.0
LATE_SPECIALIST_COST = 100_000_000.0


class SpecialistKind(Enum):
    ADVISOR = "advisor"
    EFFICIENCY = "efficiency"
    CONSULTANT = "consultant"
    NEGOTIATOR = "negotiator"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def base_cost(self) -> float:
        return _BASE_COSTS[self]

    @property
    def default_target(self) -> int:
        return _DEFAULT_TARGETS[self]


_DISPLAY_NAMES: dict[SpecialistKind, str] = {
    SpecialistKind.ADVISOR: "Investment Advisor",
    SpecialistKind.EFFICIENCY: "Efficiency Manager",
    SpecialistKind.CONSULTANT: "Consultant",
    SpecialistKind.NEGOTIATOR: "Negotiator",
}

_BASE_COSTS: dict[SpecialistKind, float] = {
    SpecialistKind.ADVISOR: EARLY_SPECIALIST_COST,
    SpecialistKind.EFFICIENCY: EARLY_SPECIALIST_COST,
    SpecialistKind.CONSULTANT: LATE_SPECIALIST_COST,
    SpecialistKind.NEGOTIATOR: LATE_SPECIALIST_COST,
}

_DEFAULT_TARGETS: dict[SpecialistKind, int] = {
    SpecialistKind.ADVISOR: 0,
    SpecialistKind.EFFICIENCY: 4,
    SpecialistKind.CONSULTANT: 0,
    SpecialistKind.NEGOTIATOR: 0,
}


@dataclass
class SpecialistState:
    """Shared timer/activation envelope; only the cycle effect varies by kind."""

    kind: SpecialistKind
    level: int = 0
    target: int = 0
    timer_ms: float = 0.0
    active_until_ms: float = 0.0

    def cycle_duration_ms(self) -> float:
        """24 hours divided by level. Only meaningful for level > 0."""
        return DAY_MS / self.level

    def is_active(self, now_ms: float) -> bool:
        return self.active_until_ms > now_ms

    def charge(self) -> float:
        """Fraction of the current cycle charged, in [0, 1]."""
        if self.level <= 0:
            return 0.0
        return min(1.0, self.timer_ms / self.cycle_duration_ms())
