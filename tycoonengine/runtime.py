from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from tycoonengine.clock import Clock, SystemClock
from tycoonengine.definition import GameDefinition
from tycoonengine.investment import InvestmentStatusView
from tycoonengine.offline import OfflineSimulator
from tycoonengine.persistence import (
    MemoryStore,
    SnapshotError,
    Store,
    decode_state,
    encode_state,
)
from tycoonengine.pipeline import ProductionPipeline
from tycoonengine.prestige import PrestigePreview, PrestigeResult
from tycoonengine.production import ProductionEngine
from tycoonengine.progression import ProgressionEngine
from tycoonengine.purchase import PurchaseKind, PurchaseOption
from tycoonengine.specialist import SpecialistKind
from tycoonengine.specialist_engine import SpecialistEngine
from tycoonengine.state import EconomyState

if TYPE_CHECKING:
    from tycoonengine.subsystem import Subsystem

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class GameRuntime:
    """Authoritative game logic processor.

    Owns the single EconomyState. Every tick and every command is one
    synchronous unit of work followed by a change notification.
    """

    def __init__(
        self,
        definition: GameDefinition,
        store: Store | None = None,
        clock: Clock | None = None,
    ) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid GameDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.definition = definition
        self.config = definition.config
        self.store = store if store is not None else MemoryStore()
        self.clock = clock if clock is not None else SystemClock()

        self.pipeline = ProductionPipeline(definition)
        self.production = ProductionEngine(self.pipeline)
        self.specialists = SpecialistEngine(self.pipeline)
        self.progression = ProgressionEngine(definition, self.pipeline)
        self.offline = OfflineSimulator(
            [self.production, self.specialists], self.config.offline_cap_ms
        )
        self._subsystems: list[Subsystem] = [self.production, self.specialists]
        self._listeners: list[Listener] = []

        self.state = self._load_state()

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta_ms: float) -> None:
        """Advance the economy by *delta_ms* milliseconds."""
        now = self.clock.now()

        gained = 0.0
        for sub in self._subsystems:
            gained += sub.tick(self.state, delta_ms, now)
        if gained:
            self.state.earn(gained)

        self.progression.check_achievements(self.state)

        if now - self.state.last_save_time_ms > self.config.autosave_interval_ms:
            self.save()

        self.notify()

    # ── Observers ────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ── Player actions ───────────────────────────────────────────────

    def start_production(self, index: int) -> bool:
        if not self.production.start(self.state, index):
            return False
        self.notify()
        return True

    def buy_investment(self, index: int, count: int = 1) -> bool:
        return self._changed(
            self.progression.buy_investment(
                self.state, index, count, self.clock.now()
            )
        )

    def hire_manager(self, index: int) -> bool:
        return self._changed(self.progression.hire_manager(self.state, index))

    def hire_specialist(self, kind: SpecialistKind) -> bool:
        return self._changed(self.progression.hire_specialist(self.state, kind))

    def set_specialist_target(self, kind: SpecialistKind, index: int) -> None:
        self.progression.set_specialist_target(self.state, kind, index)
        self.notify()

    def buy_upgrade(self, upgrade_id: str) -> bool:
        return self._changed(self.progression.purchase_upgrade(self.state, upgrade_id))

    def execute_purchase(self, option: PurchaseOption) -> bool:
        if option.kind is PurchaseKind.INVESTMENT:
            return self.buy_investment(option.index)
        if option.kind is PurchaseKind.MANAGER:
            return self.hire_manager(option.index)
        if option.kind is PurchaseKind.SPECIALIST:
            return self.hire_specialist(option.specialist)
        return self.buy_upgrade(option.upgrade_id)

    def retire(self, force: bool = False) -> PrestigeResult:
        """Start a new run. Refused unless it raises the multiplier or *force*."""
        preview = self.prestige_preview()
        if not force and not preview.worthwhile:
            return PrestigeResult(
                success=False,
                prior_money=self.state.prior_money,
                multiplier_before=preview.current_multiplier,
                multiplier_after=preview.potential_multiplier,
                reason="Retiring now would not raise the multiplier",
            )
        self.state, result = self.progression.retire(self.state, self.clock.now())
        self.save()
        self.notify()
        return result

    def hard_reset(self) -> None:
        """Forget the persisted save and start over from a fresh state."""
        self.store.clear()
        self.state = EconomyState(self.definition, self.clock.now())
        logger.info("Hard reset: persisted state cleared")
        self.notify()

    def save(self) -> None:
        self.state.last_save_time_ms = self.clock.now()
        blob = encode_state(self.state)
        self.store.save(blob)
        logger.debug("Saved snapshot (%d bytes)", len(blob))

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> EconomyState:
        """Return live reference to the economy state."""
        return self.state

    def cost_to_buy(self, index: int, count: int = 1) -> float:
        return self.pipeline.investment_cost(
            self.state, index, count, self.clock.now()
        )

    def manager_cost(self, index: int) -> float:
        return self.pipeline.manager_cost(self.state, index)

    def revenue_per_cycle(self, index: int) -> float:
        return self.pipeline.revenue_per_cycle(self.state, index)

    def production_duration(self, index: int) -> float:
        return self.pipeline.production_duration(self.state, index)

    def specialist_cost(self, kind: SpecialistKind) -> float:
        return self.pipeline.specialist_cost(self.state, kind)

    def prestige_multiplier(self) -> float:
        return self.pipeline.prestige_multiplier(self.state)

    def potential_prestige_multiplier(self) -> float:
        return self.pipeline.potential_prestige_multiplier(self.state)

    def prestige_preview(self) -> PrestigePreview:
        return self.progression.prestige_preview(self.state)

    def can_retire(self) -> bool:
        return self.prestige_preview().worthwhile

    def get_investments(self) -> list[InvestmentStatusView]:
        views: list[InvestmentStatusView] = []
        for index, idef in enumerate(self.definition.investments):
            inv = self.state.investment(index)
            views.append(
                InvestmentStatusView(
                    index=index,
                    id=idef.id,
                    display_name=idef.display_name,
                    level=inv.level,
                    status=inv.status,
                    progress=self.production.progress(self.state, index),
                    manager_level=inv.manager_level,
                    cost_next=self.cost_to_buy(index),
                    manager_cost=self.manager_cost(index),
                    revenue_per_cycle=self.revenue_per_cycle(index),
                    production_duration_ms=self.production_duration(index),
                )
            )
        return views

    def get_purchase_options(self) -> list[PurchaseOption]:
        """Everything buyable right now, affordable or not."""
        money = self.state.money
        options: list[PurchaseOption] = []
        for index, idef in enumerate(self.definition.investments):
            cost = self.cost_to_buy(index)
            options.append(
                PurchaseOption(
                    kind=PurchaseKind.INVESTMENT,
                    id=f"investment:{idef.id}",
                    display_name=idef.display_name,
                    cost=cost,
                    affordable=money >= cost,
                    index=index,
                )
            )
            cost = self.manager_cost(index)
            options.append(
                PurchaseOption(
                    kind=PurchaseKind.MANAGER,
                    id=f"manager:{idef.id}",
                    display_name=f"{idef.display_name} CEO",
                    cost=cost,
                    affordable=money >= cost,
                    index=index,
                )
            )
        for kind in SpecialistKind:
            cost = self.specialist_cost(kind)
            options.append(
                PurchaseOption(
                    kind=PurchaseKind.SPECIALIST,
                    id=f"specialist:{kind.value}",
                    display_name=kind.display_name,
                    cost=cost,
                    affordable=money >= cost,
                    specialist=kind,
                )
            )
        for upg in self.definition.upgrades:
            if self.state.has_upgrade(upg.id):
                continue
            options.append(
                PurchaseOption(
                    kind=PurchaseKind.UPGRADE,
                    id=f"upgrade:{upg.id}",
                    display_name=upg.display_name,
                    cost=upg.cost,
                    affordable=money >= upg.cost,
                    upgrade_id=upg.id,
                )
            )
        return options

    def get_affordable_purchases(self) -> list[PurchaseOption]:
        return [o for o in self.get_purchase_options() if o.affordable]

    # ── Extension points ─────────────────────────────────────────────

    def add_subsystem(self, subsystem: Subsystem) -> None:
        self._subsystems.append(subsystem)

    # ── Private helpers ──────────────────────────────────────────────

    def _changed(self, changed: bool) -> bool:
        if changed:
            self.notify()
        return changed

    def _load_state(self) -> EconomyState:
        now = self.clock.now()
        blob = self.store.load()
        if blob is None:
            return EconomyState(self.definition, now)

        try:
            state = decode_state(self.definition, blob, now)
        except SnapshotError as exc:
            logger.warning("Ignoring unreadable save, starting fresh: %s", exc)
            return EconomyState(self.definition, now)

        self._process_offline_progress(state, now)
        return state

    def _process_offline_progress(self, state: EconomyState, now: float) -> float:
        elapsed = now - state.last_save_time_ms
        if elapsed <= self.config.offline_min_gap_ms:
            return 0.0
        credited = self.offline.catch_up(state, elapsed)
        state.last_save_time_ms = now
        return credited
