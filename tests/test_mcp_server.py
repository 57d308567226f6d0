"""Tests for MCP server tool functions."""

import pytest

from tycoonengine.achievement import AchievementDef
from tycoonengine.clock import ManualClock
from tycoonengine.definition import GameConfig, GameDefinition
from tycoonengine.investment import InvestmentDef
from tycoonengine.persistence import MemoryStore
from tycoonengine.runtime import GameRuntime
from tycoonengine.upgrade import UpgradeDef

from tycoonengine.mcp.server import (
    _GameHolder,
    _tool_buy_investment,
    _tool_buy_upgrade,
    _tool_get_costs,
    _tool_get_game_info,
    _tool_get_game_state,
    _tool_get_prestige,
    _tool_hire_manager,
    _tool_hire_specialist,
    _tool_new_game,
    _tool_retire,
    _tool_set_specialist_target,
    _tool_start_production,
    _tool_wait,
    create_server,
)

XP = 6_725_000_000


def _make_test_definition() -> GameDefinition:
    """A small but complete game definition for testing."""
    return GameDefinition(
        config=GameConfig(name="Test Game", tick_interval_ms=100),
        investments=[
            InvestmentDef("lemonade", "Lemonade", base_cost=5, base_duration_ms=1000, base_revenue=4),
            InvestmentDef("paper", "Newspaper", base_cost=60, base_duration_ms=3000),
        ],
        upgrades=[UpgradeDef("sugar", "Sugar", cost=50, multiplier=3, target=0)],
        achievements=[
            AchievementDef("lemon3", "Three stands", threshold=3, reward=2, target=0),
        ],
    )


def _make_holder(money: float | None = None) -> _GameHolder:
    defn = _make_test_definition()
    clock = ManualClock()
    runtime = GameRuntime(defn, store=MemoryStore(), clock=clock)
    if money is not None:
        runtime.state.money = money
    return _GameHolder(definition=defn, runtime=runtime, clock=clock)


# ── get_game_info ────────────────────────────────────────────────────


class TestGetGameInfo:
    def test_returns_expected_structure(self):
        result = _tool_get_game_info(_make_holder())
        assert result["name"] == "Test Game"
        assert len(result["investments"]) == 2
        assert len(result["upgrades"]) == 1
        assert len(result["achievements"]) == 1
        assert len(result["specialists"]) == 4

    def test_investment_entries(self):
        result = _tool_get_game_info(_make_holder())
        first = result["investments"][0]
        assert first["index"] == 0
        assert first["id"] == "lemonade"
        assert first["display_name"] == "Lemonade"
        assert first["base_cost"] == 5


# ── get_game_state ───────────────────────────────────────────────────


class TestGetGameState:
    def test_initial_values(self):
        result = _tool_get_game_state(_make_holder())
        assert result["time_elapsed"] == 0.0
        assert result["money"] == 5.0
        assert result["investments"][0]["level"] == 0
        assert result["investments"][0]["status"] == "idle"
        assert result["specialists"]["advisor"]["level"] == 0
        assert result["achievements_unlocked"] == []

    def test_after_purchase(self):
        holder = _make_holder()
        _tool_buy_investment(holder, 0)
        result = _tool_get_game_state(holder)
        assert result["money"] == 0.0
        assert result["investments"][0]["level"] == 1


# ── get_costs ────────────────────────────────────────────────────────


class TestGetCosts:
    def test_costs(self):
        result = _tool_get_costs(_make_holder(), 0, count=2)
        assert result["cost"] == pytest.approx(5 + 5.75)
        assert result["manager_cost"] == 2500
        assert result["specialist_costs"]["consultant"] == 1e8

    def test_bad_index(self):
        assert "error" in _tool_get_costs(_make_holder(), 9)

    def test_bad_count(self):
        assert "error" in _tool_get_costs(_make_holder(), 0, count=0)


# ── purchases ────────────────────────────────────────────────────────


class TestBuyInvestment:
    def test_success(self):
        result = _tool_buy_investment(_make_holder(), 0)
        assert result["success"] is True
        assert result["cost_paid"] == 5.0
        assert result["new_level"] == 1

    def test_cannot_afford(self):
        result = _tool_buy_investment(_make_holder(), 1)
        assert result["success"] is False
        assert result["cost"] == 60.0

    def test_unknown_index(self):
        assert "error" in _tool_buy_investment(_make_holder(), -1)

    def test_count_too_high(self):
        assert "error" in _tool_buy_investment(_make_holder(), 0, count=5000)


class TestStartProduction:
    def test_requires_level(self):
        result = _tool_start_production(_make_holder(), 0)
        assert result["success"] is False

    def test_starts(self):
        holder = _make_holder()
        _tool_buy_investment(holder, 0)
        assert _tool_start_production(holder, 0)["success"] is True
        assert _tool_start_production(holder, 0)["success"] is False


class TestManagersAndSpecialists:
    def test_hire_manager(self):
        holder = _make_holder(money=3000)
        _tool_buy_investment(holder, 0)
        result = _tool_hire_manager(holder, 0)
        assert result == {"success": True, "manager_level": 1}

    def test_hire_manager_cannot_afford(self):
        assert _tool_hire_manager(_make_holder(), 0)["success"] is False

    def test_hire_specialist(self):
        holder = _make_holder(money=20_000)
        assert _tool_hire_specialist(holder, "advisor") == {"success": True, "level": 1}

    def test_unknown_specialist(self):
        assert "error" in _tool_hire_specialist(_make_holder(), "wizard")

    def test_set_target(self):
        holder = _make_holder()
        result = _tool_set_specialist_target(holder, "negotiator", 1)
        assert result["success"] is True
        assert _tool_get_game_state(holder)["specialists"]["negotiator"]["target"] == 1

    def test_set_target_bad_index(self):
        assert "error" in _tool_set_specialist_target(_make_holder(), "advisor", 5)


class TestBuyUpgrade:
    def test_success_then_already_owned(self):
        holder = _make_holder(money=100)
        assert _tool_buy_upgrade(holder, "sugar")["success"] is True
        result = _tool_buy_upgrade(holder, "sugar")
        assert result["success"] is False
        assert "Already" in result["reason"]

    def test_unknown(self):
        assert "error" in _tool_buy_upgrade(_make_holder(), "salt")


# ── wait ─────────────────────────────────────────────────────────────


class TestWait:
    def test_basic_wait(self):
        holder = _make_holder(money=3000)
        _tool_buy_investment(holder, 0)
        _tool_hire_manager(holder, 0)
        money_before = holder.runtime.state.money
        result = _tool_wait(holder, 10)
        assert result["waited"] == 10
        assert result["time_elapsed"] == 10.0
        # One production + one cooldown phase per 2 s: 5 cycles of 4
        assert result["earned"] == pytest.approx(20)
        assert result["money"] == pytest.approx(money_before + 20)

    def test_subdivision_triggers_achievements(self):
        holder = _make_holder(money=100)
        _tool_buy_investment(holder, 0, count=3)
        result = _tool_wait(holder, 1)
        assert result["new_achievements"] == ["lemon3"]
        second = _tool_wait(holder, 1)
        assert "new_achievements" not in second

    def test_negative_seconds(self):
        assert "error" in _tool_wait(_make_holder(), -1)

    def test_exceeds_max(self):
        assert "error" in _tool_wait(_make_holder(), 100000)


# ── prestige ─────────────────────────────────────────────────────────


class TestPrestige:
    def test_preview(self):
        holder = _make_holder()
        holder.runtime.state.run_earnings = 5 * XP
        result = _tool_get_prestige(holder)
        assert result["potential_experience"] == 5
        assert result["potential_multiplier"] == pytest.approx(2.0)
        assert result["worthwhile"] is True

    def test_retire_refused_without_gain(self):
        result = _tool_retire(_make_holder())
        assert result["success"] is False
        assert result["reason"]

    def test_retire_success(self):
        holder = _make_holder()
        holder.runtime.state.run_earnings = 25 * XP
        result = _tool_retire(holder)
        assert result["success"] is True
        assert result["multiplier"] == pytest.approx(4.0)
        assert holder.runtime.state.money == 5


# ── new_game ─────────────────────────────────────────────────────────


class TestNewGame:
    def test_resets_state(self):
        holder = _make_holder()
        _tool_buy_investment(holder, 0)
        _tool_wait(holder, 5)
        assert holder.clock.now() > 0

        result = _tool_new_game(holder)
        assert result["success"] is True
        assert holder.clock.now() == 0
        assert holder.runtime.state.level(0) == 0
        assert holder.runtime.state.money == 5


def test_create_server():
    server = create_server(_make_test_definition())
    assert server.name == "TycoonEngine: Test Game"
