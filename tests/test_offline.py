"""Tests for offline catch-up."""
import logging

import pytest

from tycoonengine.clock import ManualClock
from tycoonengine.definition import GameConfig, GameDefinition
from tycoonengine.investment import InvestmentDef, InvestmentStatus
from tycoonengine.offline import OfflineSimulator
from tycoonengine.persistence import MemoryStore
from tycoonengine.pipeline import ProductionPipeline
from tycoonengine.production import ProductionEngine
from tycoonengine.runtime import GameRuntime
from tycoonengine.specialist import DAY_MS, SpecialistKind
from tycoonengine.specialist_engine import SpecialistEngine
from tycoonengine.state import EconomyState


def _make_definition() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Offline"),
        investments=[
            InvestmentDef("a", base_cost=5, base_duration_ms=1000, base_revenue=10),
            InvestmentDef("b", base_cost=50, base_duration_ms=2000, base_revenue=100),
        ],
    )


def _make_simulator(cap_ms: float = DAY_MS):
    defn = _make_definition()
    pipeline = ProductionPipeline(defn)
    sim = OfflineSimulator(
        [ProductionEngine(pipeline), SpecialistEngine(pipeline)], cap_ms
    )
    state = EconomyState(defn)
    inv = state.investment(0)
    inv.level = 1
    inv.manager_level = 1
    inv.status = InvestmentStatus.RUNNING
    return sim, state


def test_zero_gap_changes_nothing():
    sim, state = _make_simulator()
    state.specialist(SpecialistKind.ADVISOR).level = 1
    assert sim.catch_up(state, 0) == 0
    assert state.money == 5
    assert state.run_earnings == 0
    assert state.specialist(SpecialistKind.ADVISOR).timer_ms == 0


def test_negative_gap_changes_nothing():
    sim, state = _make_simulator()
    assert sim.catch_up(state, -5000) == 0
    assert state.money == 5


def test_two_cycle_gap_credits_two_cycles():
    sim, state = _make_simulator()
    # Automated cycle = 1000 + 1000 / 1
    credited = sim.catch_up(state, 4000)
    assert credited == pytest.approx(20)
    assert state.money == pytest.approx(25)
    assert state.run_earnings == pytest.approx(20)


def test_gap_is_capped():
    sim, state = _make_simulator(cap_ms=10_000)
    assert sim.catch_up(state, 10_000_000) == pytest.approx(50)


def test_unmanaged_investments_do_not_earn():
    sim, state = _make_simulator()
    state.investment(1).level = 3
    state.investment(1).status = InvestmentStatus.RUNNING
    assert sim.catch_up(state, 4000) == pytest.approx(20)


def test_catch_up_logs_credit(caplog):
    sim, state = _make_simulator()
    with caplog.at_level(logging.INFO, logger="tycoonengine.offline"):
        sim.catch_up(state, 4000)
    assert "credited" in caplog.text


# ── Catch-up on load ────────────────────────────────────────────────


def _saved_store() -> MemoryStore:
    store = MemoryStore()
    runtime = GameRuntime(_make_definition(), store=store, clock=ManualClock(0))
    state = runtime.get_state()
    state.money = 10_000
    runtime.buy_investment(0)
    runtime.hire_manager(0)
    runtime.save()
    return store


def test_load_applies_catch_up():
    store = _saved_store()
    runtime = GameRuntime(_make_definition(), store=store, clock=ManualClock(6000))
    state = runtime.get_state()
    assert state.run_earnings == pytest.approx(30)
    assert state.last_save_time_ms == 6000


def test_load_ignores_small_gap():
    store = _saved_store()
    runtime = GameRuntime(_make_definition(), store=store, clock=ManualClock(1000))
    state = runtime.get_state()
    assert state.run_earnings == 0
    assert state.last_save_time_ms == 0


def test_load_caps_gap_at_a_day():
    store = _saved_store()
    runtime = GameRuntime(
        _make_definition(), store=store, clock=ManualClock(10 * DAY_MS)
    )
    # DAY_MS / 2000 ms cycles of 10 each
    assert runtime.get_state().run_earnings == pytest.approx(DAY_MS / 2000 * 10)
