"""Tests for the snapshot codec, migration and stores."""
import json
import logging

import pytest

from tycoonengine.clock import ManualClock
from tycoonengine.definition import GameConfig, GameDefinition
from tycoonengine.investment import InvestmentDef, InvestmentStatus
from tycoonengine.persistence import (
    SNAPSHOT_VERSION,
    FileStore,
    MemoryStore,
    SnapshotError,
    decode_state,
    encode_state,
    migrate,
)
from tycoonengine.runtime import GameRuntime
from tycoonengine.specialist import SpecialistKind
from tycoonengine.state import EconomyState


def _make_definition(count: int = 3) -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Persist"),
        investments=[
            InvestmentDef(f"inv{i}", base_cost=5 * 10 ** i) for i in range(count)
        ],
    )


def _make_state(defn: GameDefinition) -> EconomyState:
    state = EconomyState(defn, now_ms=100)
    state.money = 1234.5
    state.run_earnings = 2000
    state.prior_money = 7e12
    state.last_save_time_ms = 5000
    inv = state.investment(1)
    inv.level = 12
    inv.status = InvestmentStatus.MANAGER_COOLDOWN
    inv.progress_ms = 250.5
    inv.manager_level = 2
    inv.efficiency_stacks = 3
    inv.negotiator_triggers = 4
    specialist = state.specialist(SpecialistKind.NEGOTIATOR)
    specialist.level = 1
    specialist.target = 2
    specialist.timer_ms = 99.0
    specialist.active_until_ms = 77_000
    state.upgrades_bought = {"9", "0"}
    state.achievements_unlocked = {"100"}
    return state


def test_encode_is_versioned_json():
    defn = _make_definition()
    data = json.loads(encode_state(_make_state(defn)))
    assert data["version"] == SNAPSHOT_VERSION
    assert data["upgrades_bought"] == ["0", "9"]
    assert data["investments"][1]["status"] == "manager_cooldown"
    assert {s["kind"] for s in data["specialists"]} == {k.value for k in SpecialistKind}


def test_decode_restores_every_field():
    defn = _make_definition()
    original = _make_state(defn)
    restored = decode_state(defn, encode_state(original))

    assert restored.money == original.money
    assert restored.run_earnings == original.run_earnings
    assert restored.prior_money == original.prior_money
    assert restored.start_time_ms == original.start_time_ms
    assert restored.last_save_time_ms == original.last_save_time_ms
    assert restored.investments == original.investments
    assert restored.specialists == original.specialists
    assert restored.upgrades_bought == original.upgrades_bought
    assert restored.achievements_unlocked == original.achievements_unlocked


@pytest.mark.parametrize(
    "blob",
    [
        b"\xff\xfe",
        b"not json",
        b"[1, 2, 3]",
        b'{"version": 99}',
        b'{"version": "1"}',
        b'{"money": "lots"}',
        b'{"money": true}',
        b'{"investments": {"level": 1}}',
        b'{"investments": [{"level": -1}]}',
        b'{"investments": [{"level": 1.5}]}',
        b'{"investments": [{"status": "exploded"}]}',
        b'{"specialists": [{"level": 1}]}',
        b'{"specialists": [{"kind": ["advisor"]}]}',
        b'{"upgrades_bought": "0"}',
        b'{"investments": [{"level": 1, "status": "manager_cooldown", "manager_level": 0}]}',
    ],
)
def test_malformed_snapshots_raise(blob):
    with pytest.raises(SnapshotError):
        decode_state(_make_definition(), blob)


def test_snapshot_error_is_value_error():
    assert issubclass(SnapshotError, ValueError)


def test_migrate_backfills_missing_fields():
    defn = _make_definition(count=3)
    raw = {
        "money": 50,
        "investments": [{"level": 2, "is_running": True}, {"level": 1}],
    }
    data = migrate(raw, defn)

    assert data["version"] == SNAPSHOT_VERSION
    assert data["prior_money"] == 0.0
    assert data["upgrades_bought"] == []
    assert len(data["investments"]) == 3
    first, second, third = data["investments"]
    assert first["status"] == "running"
    assert "is_running" not in first
    assert first["efficiency_stacks"] == 0
    assert second["status"] == "idle"
    assert third["level"] == 0
    assert len(data["specialists"]) == 4


def test_migrate_drops_extra_investments():
    defn = _make_definition(count=1)
    raw = {"investments": [{"level": 1}, {"level": 2}]}
    assert len(migrate(raw, defn)["investments"]) == 1


def test_decode_legacy_snapshot():
    defn = _make_definition(count=6)
    blob = json.dumps(
        {
            "money": 42,
            "investments": [{"level": 3, "is_running": True}],
            "specialists": [{"kind": "advisor", "level": 1, "target": 2}],
        }
    ).encode()
    state = decode_state(defn, blob)

    assert state.money == 42
    assert state.level(0) == 3
    assert state.investment(0).status is InvestmentStatus.RUNNING
    assert state.investment(5).level == 0
    assert state.specialist(SpecialistKind.ADVISOR).target == 2
    assert state.specialist(SpecialistKind.EFFICIENCY).target == 4


def test_decode_clamps_specialist_target_to_table():
    defn = _make_definition(count=2)
    blob = json.dumps(
        {"specialists": [{"kind": "efficiency", "level": 1, "target": 4}]}
    ).encode()
    assert decode_state(defn, blob).specialist(SpecialistKind.EFFICIENCY).target == 1


# ── Stores ──────────────────────────────────────────────────────────


def test_memory_store():
    store = MemoryStore()
    assert store.load() is None
    store.save(b"abc")
    assert store.load() == b"abc"
    assert store.save_count == 1
    store.clear()
    assert store.load() is None


def test_file_store(tmp_path):
    path = tmp_path / "saves" / "game.json"
    store = FileStore(path)
    assert store.load() is None
    store.save(b"first")
    store.save(b"second")
    assert store.load() == b"second"
    assert not (tmp_path / "saves" / "game.json.tmp").exists()
    store.clear()
    assert store.load() is None
    # Clearing twice is harmless
    store.clear()


# ── Runtime integration ─────────────────────────────────────────────


@pytest.mark.parametrize(
    "blob",
    [
        b"garbage",
        b'{"investments": [{"level": 1, "status": "manager_cooldown", "manager_level": 0}]}',
    ],
)
def test_runtime_recovers_from_corrupt_save(caplog, blob):
    defn = _make_definition()
    store = MemoryStore(blob)
    with caplog.at_level(logging.WARNING, logger="tycoonengine.runtime"):
        runtime = GameRuntime(defn, store=store, clock=ManualClock(0))
    assert runtime.get_state().money == 5
    assert runtime.get_state().level(0) == 0
    runtime.tick(50)
    assert "unreadable save" in caplog.text


def test_runtime_round_trip_through_file(tmp_path):
    defn = _make_definition()
    path = tmp_path / "save.json"

    first = GameRuntime(defn, store=FileStore(path), clock=ManualClock(0))
    first.buy_investment(0)
    first.save()

    second = GameRuntime(defn, store=FileStore(path), clock=ManualClock(500))
    assert second.get_state().level(0) == 1
    assert second.get_state().money == pytest.approx(0)


def test_save_stamps_time_before_encoding():
    defn = _make_definition()
    store = MemoryStore()
    clock = ManualClock(0)
    runtime = GameRuntime(defn, store=store, clock=clock)
    clock.set(42_000)
    runtime.save()
    assert json.loads(store.load())["last_save_time_ms"] == 42_000
