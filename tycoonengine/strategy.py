from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from tycoonengine.purchase import PurchaseKind, PurchaseOption

if TYPE_CHECKING:
    from tycoonengine.prestige import PrestigePreview
    from tycoonengine.state import EconomyState


def owned_count(state: EconomyState, option: PurchaseOption) -> int:
    """How many of *option* the player already owns."""
    if option.kind is PurchaseKind.INVESTMENT:
        return state.investment(option.index).level
    if option.kind is PurchaseKind.MANAGER:
        return state.investment(option.index).manager_level
    if option.kind is PurchaseKind.SPECIALIST:
        return state.specialist(option.specialist).level
    return 1 if state.has_upgrade(option.upgrade_id) else 0


class Strategy(ABC):
    """Base class for simulation strategies."""

    @abstractmethod
    def decide_purchases(
        self, state: EconomyState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        """Return ordered list of options to buy."""
        ...

    def should_start(self, state: EconomyState, index: int) -> bool:
        """Whether to manually restart an idle investment this tick."""
        return True

    def should_retire(self, state: EconomyState, preview: PrestigePreview) -> bool:
        return False

    @abstractmethod
    def describe(self) -> str: ...


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable option first."""

    def __init__(
        self,
        retire_mode: str = "never",
        kinds: set[PurchaseKind] | None = None,
        manual_start: bool = True,
    ) -> None:
        self.retire_mode = retire_mode  # "never" or "first_opportunity"
        self.kinds = kinds
        self.manual_start = manual_start

    def decide_purchases(
        self, state: EconomyState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        candidates = [
            o for o in affordable if self.kinds is None or o.kind in self.kinds
        ]
        return sorted(candidates, key=lambda o: o.cost)

    def should_start(self, state: EconomyState, index: int) -> bool:
        return self.manual_start

    def should_retire(self, state: EconomyState, preview: PrestigePreview) -> bool:
        return self.retire_mode == "first_opportunity" and preview.worthwhile

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if self.kinds is not None:
            parts.append("(" + ", ".join(sorted(k.value for k in self.kinds)) + ")")
        if self.retire_mode != "never":
            parts.append(f"retire={self.retire_mode}")
        return " ".join(parts)


class PriorityList(Strategy):
    """Follow a designer-specified purchase order."""

    def __init__(
        self,
        priorities: list[tuple[str, int]],
        fallback: Strategy | None = None,
    ) -> None:
        self.priorities = priorities  # (option id, target count)
        self.fallback = fallback

    def decide_purchases(
        self, state: EconomyState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        by_id = {o.id: o for o in affordable}

        for option_id, target_count in self.priorities:
            option = by_id.get(option_id)
            if option is not None and owned_count(state, option) < target_count:
                return [option]

        # All priorities met or unaffordable: use fallback
        if self.fallback:
            return self.fallback.decide_purchases(state, affordable)
        return []

    def describe(self) -> str:
        items = ", ".join(f"{oid}x{cnt}" for oid, cnt in self.priorities)
        return f"PriorityList([{items}])"


class CustomStrategy(Strategy):
    """Strategy defined by callables."""

    def __init__(
        self,
        decide_fn: Callable[
            [EconomyState, list[PurchaseOption]], list[PurchaseOption]
        ] | None = None,
        start_fn: Callable[[EconomyState, int], bool] | None = None,
        retire_fn: Callable[[EconomyState, PrestigePreview], bool] | None = None,
        name: str = "Custom",
    ) -> None:
        self._decide_fn = decide_fn
        self._start_fn = start_fn
        self._retire_fn = retire_fn
        self._name = name

    def decide_purchases(
        self, state: EconomyState, affordable: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        if self._decide_fn:
            return self._decide_fn(state, affordable)
        return []

    def should_start(self, state: EconomyState, index: int) -> bool:
        if self._start_fn:
            return self._start_fn(state, index)
        return True

    def should_retire(self, state: EconomyState, preview: PrestigePreview) -> bool:
        if self._retire_fn:
            return self._retire_fn(state, preview)
        return False

    def describe(self) -> str:
        return self._name

