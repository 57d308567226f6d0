from __future__ import annotations

from typing import TYPE_CHECKING

from tycoonengine import formulas
from tycoonengine.specialist import SpecialistKind

if TYPE_CHECKING:
    from tycoonengine.definition import GameDefinition
    from tycoonengine.state import EconomyState


class ProductionPipeline:
    """Computes revenue, production time and prices from layered modifiers.

    Every query is a pure read of the state, so previews and real
    purchases/cycle payouts go through the same numbers.
    """

    def __init__(self, definition: GameDefinition) -> None:
        self.definition = definition

    # ── Revenue ──────────────────────────────────────────────────────

    def revenue_multiplier(self, state: EconomyState, index: int) -> float:
        """Product of upgrade, achievement and prestige multipliers."""
        mult = 1.0
        for upg in self.definition.upgrades:
            if state.has_upgrade(upg.id) and upg.applies_to(index):
                mult *= upg.multiplier
        for ach in self.definition.achievements:
            if not state.has_achievement(ach.id) or not ach.applies_to(index):
                continue
            if ach.revenue_reward:
                mult *= ach.reward
        return mult * self.prestige_multiplier(state)

    def revenue_per_cycle(self, state: EconomyState, index: int) -> float:
        idef = self.definition.investments[index]
        base = idef.base_revenue * state.level(index)
        return base * self.revenue_multiplier(state, index)

    # ── Speed ────────────────────────────────────────────────────────

    def speed_divisor(self, state: EconomyState, index: int) -> float:
        divisor = 1.0
        for ach in self.definition.achievements:
            if not state.has_achievement(ach.id) or not ach.applies_to(index):
                continue
            if ach.speed_reward:
                divisor /= ach.reward
        return divisor * formulas.efficiency_speedup(
            state.investment(index).efficiency_stacks
        )

    def production_duration(self, state: EconomyState, index: int) -> float:
        idef = self.definition.investments[index]
        return formulas.production_duration(
            idef.base_duration_ms, self.speed_divisor(state, index)
        )

    def cooldown_duration(self, state: EconomyState, index: int) -> float:
        """Manager restart delay: production time divided by manager level."""
        return self.production_duration(state, index) / state.investment(
            index
        ).manager_level

    def automated_cycle_duration(self, state: EconomyState, index: int) -> float:
        """One production phase plus one manager cooldown phase."""
        return self.production_duration(state, index) + self.cooldown_duration(
            state, index
        )

    # ── Prices ───────────────────────────────────────────────────────

    def price_multiplier(self, state: EconomyState, index: int, now_ms: float) -> float:
        """Negotiator discount for *index* while the negotiator is active."""
        negotiator = state.specialist(SpecialistKind.NEGOTIATOR)
        if negotiator.is_active(now_ms) and negotiator.target == index:
            triggers = state.investment(index).negotiator_triggers
            return 1.0 - formulas.negotiator_reduction(triggers)
        return 1.0

    def investment_cost(
        self, state: EconomyState, index: int, count: int, now_ms: float
    ) -> float:
        idef = self.definition.investments[index]
        return formulas.bulk_cost(
            idef.base_cost,
            state.level(index),
            idef.cost_growth,
            count,
            self.price_multiplier(state, index, now_ms),
        )

    def manager_cost(self, state: EconomyState, index: int) -> float:
        idef = self.definition.investments[index]
        return formulas.manager_cost(
            idef.base_cost, state.investment(index).manager_level
        )

    def specialist_cost(self, state: EconomyState, kind: SpecialistKind) -> float:
        return formulas.specialist_cost(kind.base_cost, state.specialist(kind).level)

    # ── Prestige ─────────────────────────────────────────────────────

    def prestige_multiplier(self, state: EconomyState) -> float:
        """Multiplier earned by previous runs."""
        return formulas.prestige_multiplier(
            formulas.experience_points(state.prior_money)
        )

    def potential_prestige_multiplier(self, state: EconomyState) -> float:
        """Multiplier the next run would get after retiring now."""
        return formulas.prestige_multiplier(
            formulas.experience_points(state.lifetime_money())
        )
