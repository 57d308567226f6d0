from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tycoonengine.specialist import SpecialistKind


class PurchaseKind(Enum):
    INVESTMENT = "investment"
    MANAGER = "manager"
    SPECIALIST = "specialist"
    UPGRADE = "upgrade"


@dataclass(frozen=True)
class PurchaseOption:
    """Read-only description of one thing that can be bought right now."""

    kind: PurchaseKind
    id: str
    display_name: str
    cost: float
    affordable: bool
    index: int | None = None
    specialist: SpecialistKind | None = None
    upgrade_id: str | None = None
