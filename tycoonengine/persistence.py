"""Snapshot codec for EconomyState and the byte stores that hold it."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tycoonengine.investment import InvestmentStatus
from tycoonengine.specialist import SpecialistKind
from tycoonengine.state import EconomyState

if TYPE_CHECKING:
    from tycoonengine.definition import GameDefinition

SNAPSHOT_VERSION = 1

_INVESTMENT_DEFAULTS: dict[str, Any] = {
    "level": 0,
    "progress_ms": 0.0,
    "manager_level": 0,
    "efficiency_stacks": 0,
    "negotiator_triggers": 0,
}

_SPECIALIST_DEFAULTS: dict[str, Any] = {
    "level": 0,
    "timer_ms": 0.0,
    "active_until_ms": 0.0,
}


class SnapshotError(ValueError):
    """Persisted bytes could not be turned into an EconomyState."""


# ── Stores ───────────────────────────────────────────────────────────


class Store(ABC):
    """Moves snapshot bytes; knows nothing about their format."""

    @abstractmethod
    def load(self) -> bytes | None: ...

    @abstractmethod
    def save(self, blob: bytes) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class MemoryStore(Store):
    def __init__(self, blob: bytes | None = None) -> None:
        self.blob = blob
        self.save_count = 0

    def load(self) -> bytes | None:
        return self.blob

    def save(self, blob: bytes) -> None:
        self.blob = blob
        self.save_count += 1

    def clear(self) -> None:
        self.blob = None


class FileStore(Store):
    """Single-file store. Writes go through a temp file and a replace."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> bytes | None:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def save(self, blob: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_bytes(blob)
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


# ── Codec ────────────────────────────────────────────────────────────


def encode_state(state: EconomyState) -> bytes:
    data = {
        "version": SNAPSHOT_VERSION,
        "money": state.money,
        "run_earnings": state.run_earnings,
        "prior_money": state.prior_money,
        "start_time_ms": state.start_time_ms,
        "last_save_time_ms": state.last_save_time_ms,
        "investments": [
            {
                "level": inv.level,
                "status": inv.status.value,
                "progress_ms": inv.progress_ms,
                "manager_level": inv.manager_level,
                "efficiency_stacks": inv.efficiency_stacks,
                "negotiator_triggers": inv.negotiator_triggers,
            }
            for inv in state.investments
        ],
        "specialists": [
            {
                "kind": specialist.kind.value,
                "level": specialist.level,
                "target": specialist.target,
                "timer_ms": specialist.timer_ms,
                "active_until_ms": specialist.active_until_ms,
            }
            for specialist in state.specialists.values()
        ],
        "upgrades_bought": sorted(state.upgrades_bought),
        "achievements_unlocked": sorted(state.achievements_unlocked),
    }
    return json.dumps(data).encode("utf-8")


def decode_state(
    definition: GameDefinition, blob: bytes, now_ms: float = 0.0
) -> EconomyState:
    """Rebuild an EconomyState from snapshot bytes.

    Raises SnapshotError on anything malformed; never returns a partially
    applied state.
    """
    try:
        raw = json.loads(blob.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise SnapshotError("Snapshot root must be an object")

    try:
        data = migrate(raw, definition)
        return _build_state(definition, data, now_ms)
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise SnapshotError(f"Snapshot has an invalid field: {exc}") from exc


def migrate(raw: dict[str, Any], definition: GameDefinition) -> dict[str, Any]:
    """Backfill fields that older snapshots lack with their defaults."""
    version = raw.get("version", SNAPSHOT_VERSION)
    if not isinstance(version, int) or version > SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version!r}")

    data = dict(raw)
    data["version"] = SNAPSHOT_VERSION
    for key in ("money", "run_earnings", "prior_money"):
        data.setdefault(key, 0.0)
    for key in ("start_time_ms", "last_save_time_ms"):
        data.setdefault(key, 0.0)
    data.setdefault("upgrades_bought", [])
    data.setdefault("achievements_unlocked", [])

    count = len(definition.investments)
    investments: list[dict[str, Any]] = []
    for entry in _as_list(data.get("investments", []), "investments")[:count]:
        if not isinstance(entry, dict):
            raise SnapshotError("Investment entries must be objects")
        inv = {**_INVESTMENT_DEFAULTS, **entry}
        if "status" not in entry:
            running = entry.get("is_running", False)
            inv["status"] = (
                InvestmentStatus.RUNNING.value if running else InvestmentStatus.IDLE.value
            )
        inv.pop("is_running", None)
        investments.append(inv)
    while len(investments) < count:
        investments.append(
            {**_INVESTMENT_DEFAULTS, "status": InvestmentStatus.IDLE.value}
        )
    data["investments"] = investments

    persisted: dict[str, dict[str, Any]] = {}
    for entry in _as_list(data.get("specialists", []), "specialists"):
        if not isinstance(entry, dict) or "kind" not in entry:
            raise SnapshotError("Specialist entries must be objects with a kind")
        persisted[entry["kind"]] = entry
    last_index = max(count - 1, 0)
    specialists: list[dict[str, Any]] = []
    for kind in SpecialistKind:
        record = {
            **_SPECIALIST_DEFAULTS,
            "kind": kind.value,
            "target": min(kind.default_target, last_index),
            **persisted.get(kind.value, {}),
        }
        if isinstance(record["target"], int) and record["target"] > last_index:
            record["target"] = last_index
        specialists.append(record)
    data["specialists"] = specialists
    return data


def _build_state(
    definition: GameDefinition, data: dict[str, Any], now_ms: float
) -> EconomyState:
    state = EconomyState(definition, now_ms)
    state.money = _number(data, "money")
    state.run_earnings = _number(data, "run_earnings")
    state.prior_money = _number(data, "prior_money")
    state.start_time_ms = _number(data, "start_time_ms")
    state.last_save_time_ms = _number(data, "last_save_time_ms")

    for inv, entry in zip(state.investments, data["investments"]):
        inv.level = _integer(entry, "level")
        inv.status = InvestmentStatus(entry["status"])
        inv.progress_ms = _number(entry, "progress_ms")
        inv.manager_level = _integer(entry, "manager_level")
        inv.efficiency_stacks = _integer(entry, "efficiency_stacks")
        inv.negotiator_triggers = _integer(entry, "negotiator_triggers")
        if inv.status is InvestmentStatus.MANAGER_COOLDOWN and inv.manager_level <= 0:
            raise SnapshotError("Manager cooldown without a hired manager")

    for entry in data["specialists"]:
        specialist = state.specialist(SpecialistKind(entry["kind"]))
        specialist.level = _integer(entry, "level")
        specialist.target = _integer(entry, "target")
        specialist.timer_ms = _number(entry, "timer_ms")
        specialist.active_until_ms = _number(entry, "active_until_ms")

    state.upgrades_bought = {
        str(id) for id in _as_list(data["upgrades_bought"], "upgrades_bought")
    }
    state.achievements_unlocked = {
        str(id)
        for id in _as_list(data["achievements_unlocked"], "achievements_unlocked")
    }
    return state


def _as_list(value: Any, name: str) -> list[Any]:
    if not isinstance(value, list):
        raise SnapshotError(f"{name} must be a list")
    return value


def _number(entry: dict[str, Any], key: str) -> float:
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number, got {value!r}")
    return float(value)


def _integer(entry: dict[str, Any], key: str) -> int:
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeError(f"{key} must be a non-negative integer, got {value!r}")
    return value
