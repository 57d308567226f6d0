from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PrestigePreview:
    """Current versus post-retirement prestige multiplier."""

    experience: int
    potential_experience: int
    current_multiplier: float
    potential_multiplier: float

    @property
    def worthwhile(self) -> bool:
        return self.potential_multiplier > self.current_multiplier


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a retirement attempt."""

    success: bool
    prior_money: float = 0.0
    multiplier_before: float = 1.0
    multiplier_after: float = 1.0
    reason: str = ""
