from __future__ import annotations

import math

from tycoonengine.report import SimulationReport

_SUFFIXES = [
    "", "K", "M", "B", "T", "Qa", "Qi", "Sx", "Sp", "Oc", "No", "Dc",
    "Ud", "Dd", "Td", "Qad", "Qid", "Sxd", "Spd", "Od", "Nd", "V",
]


def format_money(amount: float) -> str:
    """Short money string: 999.00, 1.5K, 12.3M, ..."""
    if amount < 1000:
        return f"{amount:.2f}"
    group = min(int(math.log10(amount) // 3), len(_SUFFIXES) - 1)
    short = amount / 1000 ** group
    return f"{short:.3g}{_SUFFIXES[group]}"


def format_duration(ms: float) -> str:
    if ms < 1000:
        return f"{round(ms)}ms"
    sec = ms / 1000
    if sec < 60:
        return f"{sec:.1f}s"
    minutes = sec / 60
    if minutes < 60:
        return f"{minutes:.1f}m"
    return f"{minutes / 60:.1f}h"


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 40 + " Tycoon Simulation Report " + "=" * 40)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Terminal: {report.terminal_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append(f"Money: {format_money(report.final_money)}")
    lines.append(f"Lifetime earnings: {format_money(report.lifetime_money)}")
    lines.append("")

    if report.achievements:
        lines.append("ACHIEVEMENTS:")
        for a in report.achievements:
            lines.append(f"  * {a.achievement_id:.<30s} {a.time:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")

    if report.retirements:
        lines.append("")
        lines.append("RETIREMENTS:")
        for r in report.retirements:
            lines.append(
                f"  * {r.time:.1f}s  x{r.multiplier_before:.2f} -> "
                f"x{r.multiplier_after:.2f} after {r.run_duration:.1f}s"
            )

    return "\n".join(lines)
