from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UpgradeDef:
    """One-time purchase multiplying revenue of one investment or all."""

    id: str
    display_name: str = ""
    cost: float = 0.0
    multiplier: float = 1.0
    target: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id

    def applies_to(self, index: int) -> bool:
        return self.target is None or self.target == index
