"""Integration test with the oil tycoon example game."""
import sys
import os

import pytest

# Ensure examples can be imported
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from examples.oil_tycoon import define_game
from tycoonengine.formatting import format_text_report
from tycoonengine.runtime import GameRuntime
from tycoonengine.simulation import Simulation
from tycoonengine.specialist import SpecialistKind
from tycoonengine.strategy import GreedyCheapest
from tycoonengine.terminal import Terminal


def test_oil_game_validates():
    defn = define_game()
    errors = defn.validate()
    assert errors == [], f"Validation errors: {errors}"


def test_oil_game_tables():
    defn = define_game()
    assert len(defn.investments) == 8
    assert defn.investments[0].base_revenue == pytest.approx(2 / 1.5)
    assert defn.get_upgrade("8").target is None
    assert defn.get_achievement("2").speed_reward


def test_fresh_game_can_afford_first_property():
    runtime = GameRuntime(define_game())
    assert runtime.state.money == 5
    assert runtime.state.specialist(SpecialistKind.EFFICIENCY).target == 4
    assert runtime.buy_investment(0)
    assert runtime.state.money == pytest.approx(3)


def test_oil_game_simulation():
    defn = define_game()
    terminal = Terminal.any(
        Terminal.time(3600),
        Terminal.achievement("1"),
    )

    sim = Simulation(
        definition=defn,
        strategy=GreedyCheapest(),
        terminal=terminal,
        tick_resolution_ms=1000,
    )
    report = sim.run()

    assert report.total_time > 0
    assert len(report.purchases) > 0
    assert report.purchases[0].purchase_id == "investment:gas_royalties"

    # Ten gas royalties come well before the hour is up
    assert "0" in report.achievement_times
    assert report.achievement_times["0"] < 3600

    text = format_text_report(report)
    assert "Tycoon Simulation Report" in text
