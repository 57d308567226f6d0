from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tycoonengine import formulas
from tycoonengine.investment import InvestmentStatus
from tycoonengine.prestige import PrestigePreview, PrestigeResult
from tycoonengine.specialist import SpecialistKind
from tycoonengine.state import EconomyState

if TYPE_CHECKING:
    from tycoonengine.definition import GameDefinition
    from tycoonengine.pipeline import ProductionPipeline

logger = logging.getLogger(__name__)


class ProgressionEngine:
    """Purchases, achievement unlocks and retirement."""

    def __init__(self, definition: GameDefinition, pipeline: ProductionPipeline) -> None:
        self.definition = definition
        self.pipeline = pipeline

    # ── Purchases ────────────────────────────────────────────────────

    def buy_investment(
        self, state: EconomyState, index: int, count: int, now_ms: float
    ) -> bool:
        if count < 1:
            return False
        cost = self.pipeline.investment_cost(state, index, count, now_ms)
        if state.money < cost:
            return False
        state.money -= cost
        state.investment(index).level += count
        return True

    def hire_manager(self, state: EconomyState, index: int) -> bool:
        cost = self.pipeline.manager_cost(state, index)
        if state.money < cost:
            return False
        state.money -= cost
        inv = state.investment(index)
        inv.manager_level += 1
        # Hiring a manager turns an idle property on.
        if inv.status is InvestmentStatus.IDLE:
            inv.status = InvestmentStatus.RUNNING
            inv.progress_ms = 0.0
        return True

    def hire_specialist(self, state: EconomyState, kind: SpecialistKind) -> bool:
        cost = self.pipeline.specialist_cost(state, kind)
        if state.money < cost:
            return False
        state.money -= cost
        state.specialist(kind).level += 1
        return True

    def purchase_upgrade(self, state: EconomyState, upgrade_id: str) -> bool:
        if state.has_upgrade(upgrade_id):
            return False
        upg = self.definition.get_upgrade(upgrade_id)
        if upg is None:
            return False
        if state.money < upg.cost:
            return False
        state.money -= upg.cost
        state.upgrades_bought.add(upg.id)
        return True

    def set_specialist_target(
        self, state: EconomyState, kind: SpecialistKind, index: int
    ) -> None:
        if not 0 <= index < len(state.investments):
            raise IndexError(f"No investment at index {index}")
        state.specialist(kind).target = index

    # ── Achievements ─────────────────────────────────────────────────

    def check_achievements(self, state: EconomyState) -> list[str]:
        """Unlock achievements whose threshold is now met. Returns new ids."""
        unlocked: list[str] = []
        for ach in self.definition.achievements:
            if state.has_achievement(ach.id):
                continue
            if ach.target is None:
                level = state.min_level()
            else:
                level = state.level(ach.target)
            if level >= ach.threshold:
                state.achievements_unlocked.add(ach.id)
                unlocked.append(ach.id)
        if unlocked:
            logger.debug("Achievements unlocked: %s", ", ".join(unlocked))
        return unlocked

    # ── Retirement ───────────────────────────────────────────────────

    def prestige_preview(self, state: EconomyState) -> PrestigePreview:
        return PrestigePreview(
            experience=formulas.experience_points(state.prior_money),
            potential_experience=formulas.experience_points(state.lifetime_money()),
            current_multiplier=self.pipeline.prestige_multiplier(state),
            potential_multiplier=self.pipeline.potential_prestige_multiplier(state),
        )

    def retire(
        self, state: EconomyState, now_ms: float
    ) -> tuple[EconomyState, PrestigeResult]:
        """Fold this run into prior money and build the next run's state.

        Only unlocked achievements carry over. The old state is not touched.
        """
        before = self.pipeline.prestige_multiplier(state)
        fresh = EconomyState(self.definition, now_ms)
        fresh.prior_money = state.lifetime_money()
        fresh.achievements_unlocked = set(state.achievements_unlocked)
        after = self.pipeline.prestige_multiplier(fresh)
        logger.info(
            "Retired with %.2f lifetime money, multiplier %.3f -> %.3f",
            fresh.prior_money,
            before,
            after,
        )
        return fresh, PrestigeResult(
            success=True,
            prior_money=fresh.prior_money,
            multiplier_before=before,
            multiplier_after=after,
        )
