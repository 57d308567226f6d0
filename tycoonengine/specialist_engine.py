from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from tycoonengine import formulas
from tycoonengine.specialist import ACTIVE_WINDOW_MS, SpecialistKind, SpecialistState
from tycoonengine.subsystem import SimulationProxy, Subsystem

if TYPE_CHECKING:
    from tycoonengine.pipeline import ProductionPipeline
    from tycoonengine.state import EconomyState

logger = logging.getLogger(__name__)

CycleHandler = Callable[["EconomyState", SpecialistState, float], None]


class SpecialistEngine(Subsystem, SimulationProxy):
    """Charges specialist timers and fires their kind-specific effects."""

    def __init__(self, pipeline: ProductionPipeline) -> None:
        self.pipeline = pipeline
        self._handlers: dict[SpecialistKind, CycleHandler] = {
            SpecialistKind.ADVISOR: self._advise,
            SpecialistKind.EFFICIENCY: self._streamline,
            SpecialistKind.CONSULTANT: self._consult,
            SpecialistKind.NEGOTIATOR: self._negotiate,
        }

    def tick(self, state: EconomyState, delta_ms: float, now_ms: float) -> float:
        for specialist in state.specialists.values():
            if specialist.active_until_ms > 0 and now_ms > specialist.active_until_ms:
                specialist.active_until_ms = 0.0

            if specialist.level <= 0:
                continue
            specialist.timer_ms += delta_ms
            if specialist.timer_ms >= specialist.cycle_duration_ms():
                self._handlers[specialist.kind](state, specialist, now_ms)

        return self.consultant_bonus(state, delta_ms, now_ms)

    def catch_up(self, state: EconomyState, gap_ms: float) -> float:
        # Effects are not replayed offline; only the timers charge.
        for specialist in state.specialists.values():
            if specialist.level > 0:
                specialist.timer_ms += gap_ms
        return 0.0

    def consultant_bonus(
        self, state: EconomyState, delta_ms: float, now_ms: float
    ) -> float:
        """Bonus income for this tick while the consultant is active."""
        consultant = state.specialist(SpecialistKind.CONSULTANT)
        if consultant.level <= 0 or not consultant.is_active(now_ms):
            return 0.0
        index = consultant.target
        if state.level(index) <= 0:
            return 0.0
        per_second = formulas.consultant_bonus_per_second(
            consultant.level,
            self.pipeline.revenue_per_cycle(state, index),
            self.pipeline.production_duration(state, index),
        )
        return per_second * (delta_ms / 1000.0)

    # ── Cycle effects ────────────────────────────────────────────────

    def _advise(self, state: EconomyState, specialist: SpecialistState, now_ms: float) -> None:
        specialist.timer_ms = 0.0
        state.investment(specialist.target).level += 1
        logger.debug("Advisor granted a free level to investment %d", specialist.target)

    def _streamline(
        self, state: EconomyState, specialist: SpecialistState, now_ms: float
    ) -> None:
        specialist.timer_ms = 0.0
        state.investment(specialist.target).efficiency_stacks += 1
        logger.debug("Efficiency stack added to investment %d", specialist.target)

    def _consult(self, state: EconomyState, specialist: SpecialistState, now_ms: float) -> None:
        if self._open_window(specialist, now_ms):
            logger.debug("Consultant active on investment %d", specialist.target)

    def _negotiate(
        self, state: EconomyState, specialist: SpecialistState, now_ms: float
    ) -> None:
        if self._open_window(specialist, now_ms):
            state.investment(specialist.target).negotiator_triggers += 1
            logger.debug("Negotiator active on investment %d", specialist.target)

    @staticmethod
    def _open_window(specialist: SpecialistState, now_ms: float) -> bool:
        """Start the active window, or hold the timer full while one is open."""
        if specialist.active_until_ms == 0:
            specialist.active_until_ms = now_ms + ACTIVE_WINDOW_MS
            specialist.timer_ms = 0.0
            return True
        specialist.timer_ms = specialist.cycle_duration_ms()
        return False
