from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvestmentStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    MANAGER_COOLDOWN = "manager_cooldown"


@dataclass
class InvestmentDef:
    """Static definition of an income-producing investment."""

    id: str
    display_name: str = ""
    base_cost: float = 1.0
    cost_growth: float = 1.15
    base_duration_ms: float = 1000.0
    base_revenue: float | None = None

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id
        if self.base_revenue is None:
            self.base_revenue = self.base_cost / 1.5


@dataclass
class InvestmentState:
    """Mutable runtime state for one investment."""

    level: int = 0
    status: InvestmentStatus = InvestmentStatus.IDLE
    progress_ms: float = 0.0
    manager_level: int = 0
    efficiency_stacks: int = 0
    negotiator_triggers: int = 0

    @property
    def automated(self) -> bool:
        return self.manager_level > 0


@dataclass(frozen=True)
class InvestmentStatusView:
    """Read-only snapshot of an investment for query results."""

    index: int
    id: str
    display_name: str
    level: int
    status: InvestmentStatus
    progress: float
    manager_level: int
    cost_next: float
    manager_cost: float
    revenue_per_cycle: float
    production_duration_ms: float
