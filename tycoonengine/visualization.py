from __future__ import annotations

from tycoonengine.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install tycoonengine[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(
        f"Tycoon Simulation: {report.strategy_description}",
        fontsize=14,
    )

    # 1. Money over time (log scale)
    ax1 = axes[0][0]
    series = report.money_series()
    if series:
        times, values = zip(*series)
        ax1.plot(times, [max(v, 1e-10) for v in values], label="money")
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Money")
    ax1.set_title("Balance")
    ax1.grid(True, alpha=0.3)

    # 2. Income rate over time
    ax2 = axes[0][1]
    series = report.income_series()
    if series:
        times, rates = zip(*series)
        ax2.plot(times, rates)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Income (/s)")
    ax2.set_title("Income Rate")
    ax2.grid(True, alpha=0.3)

    # 3. Investment levels
    ax3 = axes[1][0]
    ids = sorted({s.investment_id for s in report.level_snapshots})
    for iid in ids:
        levels = report.level_series(iid)
        if levels and any(lvl > 0 for _, lvl in levels):
            times, values = zip(*levels)
            ax3.plot(times, values, label=iid)
    ax3.set_xlabel("Time (s)")
    ax3.set_ylabel("Level")
    ax3.set_title("Investment Levels")
    if ids:
        ax3.legend(fontsize=7)
    ax3.grid(True, alpha=0.3)

    # 4. Spend per purchase, retirements marked
    ax4 = axes[1][1]
    if report.purchases:
        ax4.scatter(
            [p.time for p in report.purchases],
            [max(p.cost_paid, 1e-10) for p in report.purchases],
            s=6,
            alpha=0.6,
        )
    for event in report.retirements:
        ax4.axvline(event.time, color="red", linestyle="--", alpha=0.6)
    ax4.set_yscale("log")
    ax4.set_xlabel("Time (s)")
    ax4.set_ylabel("Cost paid")
    ax4.set_title(
        f"Purchases ({report.purchases_per_minute:.1f}/min, "
        f"{len(report.retirements)} retirements)"
    )
    ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
