"""MCP server wrapping GameRuntime for interactive AI playtesting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP

from tycoonengine.clock import ManualClock
from tycoonengine.definition import GameDefinition
from tycoonengine.persistence import MemoryStore
from tycoonengine.runtime import GameRuntime
from tycoonengine.specialist import SpecialistKind

# Maximum seconds per wait() call (1 hour)
_MAX_WAIT = 3600
# Maximum levels per buy_investment() call
_MAX_BUY = 1000


@dataclass
class _GameHolder:
    """Holds the active game definition, runtime and its manual clock."""

    definition: GameDefinition
    runtime: GameRuntime
    clock: ManualClock


def _new_holder(definition: GameDefinition) -> _GameHolder:
    clock = ManualClock()
    runtime = GameRuntime(definition, store=MemoryStore(), clock=clock)
    return _GameHolder(definition=definition, runtime=runtime, clock=clock)


def _check_index(holder: _GameHolder, index: int) -> str | None:
    if not 0 <= index < len(holder.definition.investments):
        return f"Unknown investment index: {index}"
    return None


def _parse_kind(kind: str) -> SpecialistKind | None:
    try:
        return SpecialistKind(kind)
    except ValueError:
        return None


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    defn = holder.definition
    return {
        "name": defn.config.name,
        "investments": [
            {
                "index": i,
                "id": inv.id,
                "display_name": inv.display_name,
                "base_cost": inv.base_cost,
                "base_duration_ms": inv.base_duration_ms,
            }
            for i, inv in enumerate(defn.investments)
        ],
        "upgrades": [
            {"id": u.id, "display_name": u.display_name, "cost": u.cost, "target": u.target}
            for u in defn.upgrades
        ],
        "achievements": [
            {"id": a.id, "description": a.description, "target": a.target}
            for a in defn.achievements
        ],
        "specialists": [
            {"kind": k.value, "display_name": k.display_name} for k in SpecialistKind
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    runtime = holder.runtime
    state = runtime.get_state()
    now = holder.clock.now()
    return {
        "time_elapsed": round(now / 1000.0, 2),
        "money": round(state.money, 2),
        "run_earnings": round(state.run_earnings, 2),
        "prior_money": round(state.prior_money, 2),
        "investments": [
            {
                "index": v.index,
                "id": v.id,
                "level": v.level,
                "status": v.status.value,
                "progress": round(v.progress, 4),
                "manager_level": v.manager_level,
            }
            for v in runtime.get_investments()
        ],
        "specialists": {
            specialist.kind.value: {
                "level": specialist.level,
                "target": specialist.target,
                "charge": round(specialist.charge(), 4),
                "active": specialist.is_active(now),
            }
            for specialist in state.specialists.values()
        },
        "upgrades_bought": sorted(state.upgrades_bought),
        "achievements_unlocked": sorted(state.achievements_unlocked),
    }


def _tool_get_costs(holder: _GameHolder, index: int, count: int = 1) -> dict[str, Any]:
    error = _check_index(holder, index)
    if error:
        return {"error": error}
    if count < 1:
        return {"error": "Count must be at least 1"}
    runtime = holder.runtime
    return {
        "index": index,
        "count": count,
        "cost": round(runtime.cost_to_buy(index, count), 2),
        "manager_cost": round(runtime.manager_cost(index), 2),
        "revenue_per_cycle": round(runtime.revenue_per_cycle(index), 2),
        "production_duration_ms": round(runtime.production_duration(index), 2),
        "specialist_costs": {
            k.value: round(runtime.specialist_cost(k), 2) for k in SpecialistKind
        },
    }


def _tool_start_production(holder: _GameHolder, index: int) -> dict[str, Any]:
    error = _check_index(holder, index)
    if error:
        return {"error": error}
    if holder.runtime.start_production(index):
        return {"success": True, "index": index}
    return {"success": False, "reason": "Not idle, or no levels owned"}


def _tool_buy_investment(
    holder: _GameHolder, index: int, count: int = 1
) -> dict[str, Any]:
    error = _check_index(holder, index)
    if error:
        return {"error": error}
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_BUY:
        return {"error": f"Count cannot exceed {_MAX_BUY}"}
    cost = holder.runtime.cost_to_buy(index, count)
    if holder.runtime.buy_investment(index, count):
        return {
            "success": True,
            "cost_paid": round(cost, 2),
            "new_level": holder.runtime.state.level(index),
        }
    return {"success": False, "reason": "Cannot afford", "cost": round(cost, 2)}


def _tool_hire_manager(holder: _GameHolder, index: int) -> dict[str, Any]:
    error = _check_index(holder, index)
    if error:
        return {"error": error}
    if holder.runtime.hire_manager(index):
        inv = holder.runtime.state.investment(index)
        return {"success": True, "manager_level": inv.manager_level}
    return {"success": False, "reason": "Cannot afford"}


def _tool_hire_specialist(holder: _GameHolder, kind: str) -> dict[str, Any]:
    skind = _parse_kind(kind)
    if skind is None:
        return {"error": f"Unknown specialist kind: {kind!r}"}
    if holder.runtime.hire_specialist(skind):
        return {"success": True, "level": holder.runtime.state.specialist(skind).level}
    return {"success": False, "reason": "Cannot afford"}


def _tool_set_specialist_target(
    holder: _GameHolder, kind: str, index: int
) -> dict[str, Any]:
    skind = _parse_kind(kind)
    if skind is None:
        return {"error": f"Unknown specialist kind: {kind!r}"}
    error = _check_index(holder, index)
    if error:
        return {"error": error}
    holder.runtime.set_specialist_target(skind, index)
    return {"success": True, "kind": skind.value, "target": index}


def _tool_buy_upgrade(holder: _GameHolder, upgrade_id: str) -> dict[str, Any]:
    if holder.definition.get_upgrade(upgrade_id) is None:
        return {"error": f"Unknown upgrade: {upgrade_id!r}"}
    if holder.runtime.state.has_upgrade(upgrade_id):
        return {"success": False, "reason": "Already purchased"}
    if holder.runtime.buy_upgrade(upgrade_id):
        return {"success": True, "upgrade_id": upgrade_id}
    return {"success": False, "reason": "Cannot afford"}


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds per call"}

    runtime = holder.runtime
    before = set(runtime.state.achievements_unlocked)
    money_before = runtime.state.money

    # Subdivide into nominal scheduler ticks
    step = holder.definition.config.tick_interval_ms
    remaining = seconds * 1000.0
    while remaining > 0:
        dt = min(step, remaining)
        holder.clock.advance(dt)
        runtime.tick(dt)
        remaining -= dt

    state = runtime.state
    result: dict[str, Any] = {
        "waited": seconds,
        "time_elapsed": round(holder.clock.now() / 1000.0, 2),
        "money": round(state.money, 2),
        "earned": round(state.money - money_before, 2),
    }
    new_achievements = sorted(state.achievements_unlocked - before)
    if new_achievements:
        result["new_achievements"] = new_achievements
    return result


def _tool_get_prestige(holder: _GameHolder) -> dict[str, Any]:
    preview = holder.runtime.prestige_preview()
    return {
        "experience": preview.experience,
        "potential_experience": preview.potential_experience,
        "current_multiplier": round(preview.current_multiplier, 4),
        "potential_multiplier": round(preview.potential_multiplier, 4),
        "worthwhile": preview.worthwhile,
    }


def _tool_retire(holder: _GameHolder) -> dict[str, Any]:
    result = holder.runtime.retire()
    if result.success:
        return {
            "success": True,
            "prior_money": round(result.prior_money, 2),
            "multiplier": round(result.multiplier_after, 4),
        }
    return {"success": False, "reason": result.reason}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    fresh = _new_holder(holder.definition)
    holder.runtime = fresh.runtime
    holder.clock = fresh.clock
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(definition: GameDefinition) -> FastMCP:
    """Create an MCP server wrapping a GameRuntime for the given definition."""
    holder = _new_holder(definition)

    mcp = FastMCP(
        name=f"TycoonEngine: {definition.config.name}",
    )

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static game overview: investments, upgrades, achievements, specialists."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get current state: money, investment levels and status, specialists, unlocks."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_costs(index: int, count: int = 1) -> dict[str, Any]:
        """Get buy cost for COUNT levels, manager cost, revenue and cycle time of an investment."""
        return _tool_get_costs(holder, index, count)

    @mcp.tool()
    def start_production(index: int) -> dict[str, Any]:
        """Manually start an idle investment's production cycle."""
        return _tool_start_production(holder, index)

    @mcp.tool()
    def buy_investment(index: int, count: int = 1) -> dict[str, Any]:
        """Buy COUNT levels of an investment (max 1000)."""
        return _tool_buy_investment(holder, index, count)

    @mcp.tool()
    def hire_manager(index: int) -> dict[str, Any]:
        """Hire or upgrade the CEO that automates an investment."""
        return _tool_hire_manager(holder, index)

    @mcp.tool()
    def hire_specialist(kind: str) -> dict[str, Any]:
        """Hire or level up a specialist: advisor, efficiency, consultant or negotiator."""
        return _tool_hire_specialist(holder, kind)

    @mcp.tool()
    def set_specialist_target(kind: str, index: int) -> dict[str, Any]:
        """Point a specialist at an investment."""
        return _tool_set_specialist_target(holder, kind, index)

    @mcp.tool()
    def buy_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy a one-time revenue upgrade."""
        return _tool_buy_upgrade(holder, upgrade_id)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 3600) in nominal ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def get_prestige() -> dict[str, Any]:
        """Compare the current prestige multiplier with the one retiring would give."""
        return _tool_get_prestige(holder)

    @mcp.tool()
    def retire() -> dict[str, Any]:
        """Retire: convert this run's earnings into a permanent multiplier."""
        return _tool_retire(holder)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
