from __future__ import annotations

import csv
import json
from collections.abc import Iterable
from pathlib import Path

from tycoonengine.report import SimulationReport


def _write_csv(path: str, header: list[str], rows: Iterable[list]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Write one CSV per series, named ``{path}_<series>.csv``.

    Series: money, levels, purchases, achievements, retirements.
    """
    base = str(path)
    tables = {
        "money": (
            ["time", "money", "lifetime_money", "income_rate"],
            ([s.time, s.money, s.lifetime_money, s.income_rate] for s in report.money_snapshots),
        ),
        "levels": (
            ["time", "investment_id", "level", "manager_level"],
            ([s.time, s.investment_id, s.level, s.manager_level] for s in report.level_snapshots),
        ),
        "purchases": (
            ["time", "purchase_id", "cost_paid", "money_after"],
            ([p.time, p.purchase_id, p.cost_paid, p.money_after] for p in report.purchases),
        ),
        "achievements": (
            ["time", "achievement_id"],
            ([a.time, a.achievement_id] for a in report.achievements),
        ),
        "retirements": (
            ["time", "prior_money", "multiplier_before", "multiplier_after", "run_duration"],
            (
                [r.time, r.prior_money, r.multiplier_before, r.multiplier_after, r.run_duration]
                for r in report.retirements
            ),
        ),
    }
    for series, (header, rows) in tables.items():
        _write_csv(f"{base}_{series}.csv", header, rows)


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Dump the report summary plus purchase and retirement logs."""
    summary = {
        "strategy": report.strategy_description,
        "terminal": report.terminal_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "final_money": report.final_money,
        "lifetime_money": report.lifetime_money,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "achievement_times": report.achievement_times,
    }
    summary["purchases"] = [
        {"time": p.time, "purchase_id": p.purchase_id, "cost_paid": p.cost_paid}
        for p in report.purchases
    ]
    summary["retirements"] = [
        {"time": r.time, "prior_money": r.prior_money, "multiplier_after": r.multiplier_after}
        for r in report.retirements
    ]
    Path(path).write_text(json.dumps(summary, indent=2))
