from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AchievementDef:
    """A permanent unlock granted when a level threshold is reached.

    ``target=None`` tests the lowest level across all investments. A reward
    above 1 multiplies revenue; a reward in (0, 1) divides production time.
    """

    id: str
    description: str = ""
    threshold: int = 0
    reward: float = 1.0
    target: int | None = None

    def applies_to(self, index: int) -> bool:
        return self.target is None or self.target == index

    @property
    def revenue_reward(self) -> bool:
        return self.reward > 1

    @property
    def speed_reward(self) -> bool:
        return 0 < self.reward < 1
