from __future__ import annotations

import argparse
import importlib
import logging
import sys

from tycoonengine.clock import SystemClock
from tycoonengine.definition import GameDefinition
from tycoonengine.formatting import format_duration, format_money, format_text_report
from tycoonengine.persistence import FileStore
from tycoonengine.purchase import PurchaseKind
from tycoonengine.runtime import GameRuntime
from tycoonengine.scheduler import Scheduler
from tycoonengine.simulation import Simulation
from tycoonengine.strategy import GreedyCheapest, Strategy
from tycoonengine.terminal import Terminal, TerminalCondition

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tycoonengine",
        description="TycoonEngine: incremental economy simulation CLI",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for INFO logging, -vv for DEBUG",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a headless balance simulation")
    sim.add_argument("game_module", help="Python module with define_game()")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "investments_first"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument(
        "--tick-resolution", type=float, default=1000.0, help="Milliseconds per tick"
    )
    sim.add_argument(
        "--terminal-time", type=float, default=3600, help="Max simulation time (s)"
    )
    sim.add_argument(
        "--retire",
        action="store_true",
        help="Retire whenever it raises the prestige multiplier",
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    play = sub.add_parser("play", help="Run the game in real time against a save file")
    play.add_argument("game_module", help="Python module with define_game()")
    play.add_argument("--save", required=True, help="Save file path")
    play.add_argument(
        "--seconds", type=float, default=None, help="Stop after N seconds"
    )

    status = sub.add_parser("status", help="Load a save file and print its state")
    status.add_argument("game_module", help="Python module with define_game()")
    status.add_argument("--save", required=True, help="Save file path")

    reset = sub.add_parser("reset", help="Delete a save file")
    reset.add_argument("--save", required=True, help="Save file path")

    serve = sub.add_parser("mcp", help="Serve the game as MCP tools over stdio")
    serve.add_argument("game_module", help="Python module with define_game()")

    return parser


def load_game(module_path: str) -> GameDefinition:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def build_strategy(name: str, retire: bool = False) -> Strategy:
    retire_mode = "first_opportunity" if retire else "never"
    if name == "investments_first":
        return GreedyCheapest(
            retire_mode=retire_mode,
            kinds={PurchaseKind.INVESTMENT, PurchaseKind.MANAGER},
        )
    return GreedyCheapest(retire_mode=retire_mode)


def format_status(runtime: GameRuntime) -> str:
    """Short console summary of a runtime's balances and levels."""
    state = runtime.get_state()
    lines = [
        f"{runtime.config.name}",
        f"Money: {format_money(state.money)}",
        f"Run earnings: {format_money(state.run_earnings)}",
        f"Prior money: {format_money(state.prior_money)}",
        f"Multiplier: x{runtime.prestige_multiplier():.3f} "
        f"(x{runtime.potential_prestige_multiplier():.3f} after retiring)",
        "",
    ]
    for view in runtime.get_investments():
        if view.level == 0:
            continue
        lines.append(
            f"  {view.display_name:.<24s} lvl {view.level:<5d} "
            f"CEO {view.manager_level:<3d} {view.status.value:<17s} "
            f"{format_money(view.revenue_per_cycle)} / "
            f"{format_duration(view.production_duration_ms)}"
        )
    specialists = [s for s in state.specialists.values() if s.level > 0]
    if specialists:
        lines.append("")
        for specialist in specialists:
            lines.append(
                f"  {specialist.kind.display_name:.<24s} lvl {specialist.level:<3d} "
                f"target {specialist.target} charge {specialist.charge():.0%}"
            )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        _simulate(args)
    elif args.command == "play":
        _play(args)
    elif args.command == "status":
        definition = load_game(args.game_module)
        runtime = GameRuntime(definition, store=FileStore(args.save))
        print(format_status(runtime))
        runtime.save()
    elif args.command == "reset":
        FileStore(args.save).clear()
        logger.info("Removed save file %s", args.save)
        print(f"Save {args.save} cleared")
    elif args.command == "mcp":
        _serve_mcp(args)


def _simulate(args: argparse.Namespace) -> None:
    definition = load_game(args.game_module)
    terminal: TerminalCondition = Terminal.time(args.terminal_time)
    strategy = build_strategy(args.strategy, retire=args.retire)

    sim = Simulation(
        definition=definition,
        strategy=strategy,
        terminal=terminal,
        tick_resolution_ms=args.tick_resolution,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.export_csv:
        from tycoonengine.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}_*.csv")

    if args.export_json:
        from tycoonengine.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from tycoonengine.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")


def _play(args: argparse.Namespace) -> None:
    definition = load_game(args.game_module)
    clock = SystemClock()
    runtime = GameRuntime(definition, store=FileStore(args.save), clock=clock)
    scheduler = Scheduler(runtime, clock)

    duration = args.seconds * 1000.0 if args.seconds is not None else None
    try:
        scheduler.run(duration_ms=duration)
    except KeyboardInterrupt:
        scheduler.stop()
    finally:
        runtime.save()
    print(format_status(runtime))


def _serve_mcp(args: argparse.Namespace) -> None:
    # stdout carries the protocol; anything define_game() prints goes to stderr
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        definition = load_game(args.game_module)
    finally:
        sys.stdout = real_stdout

    from tycoonengine.mcp.server import create_server

    logger.info("Serving %s over stdio", definition.config.name)
    create_server(definition).run(transport="stdio")
