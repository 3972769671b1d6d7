from __future__ import annotations

import argparse
import importlib
import sys

from binomialtheory.definition import TheoryConfig
from binomialtheory.formatting import format_text_report
from binomialtheory.simulation import Simulation


def _parse_assignment(text: str) -> tuple[str, int]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=LEVEL, got {text!r}")
    try:
        return key, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"level must be an integer in {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="binomialtheory",
        description="Binomial Distribution theory: headless simulation CLI",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a simulation at fixed levels")
    sim.add_argument(
        "theory_module",
        nargs="?",
        default=None,
        help="Python module with define_theory() (default: built-in theory)",
    )
    sim.add_argument(
        "--level",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="KEY=LEVEL",
        help="Upgrade level, e.g. --level q1=10 (repeatable)",
    )
    sim.add_argument(
        "--milestone",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="KEY=LEVEL",
        help="Milestone level, e.g. --milestone sigma=1 (repeatable)",
    )
    sim.add_argument("--duration", type=float, default=600.0, help="Seconds to simulate")
    sim.add_argument(
        "--tick-resolution", type=float, default=0.1, help="Seconds per tick"
    )
    sim.add_argument("--multiplier", type=float, default=1.0, help="Speed multiplier")
    sim.add_argument(
        "--snapshot-interval", type=float, default=1.0, help="Seconds between snapshots"
    )
    sim.add_argument("--state", default=None, help='Initial internal state "t q"')
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    return parser


def load_theory(module_path: str | None) -> TheoryConfig:
    """Import module and call define_theory(). None means the built-in config."""
    if module_path is None:
        return TheoryConfig()
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_theory"):
        print(f"Error: module {module_path!r} has no define_theory() function")
        sys.exit(1)
    return mod.define_theory()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        config = load_theory(args.theory_module)
        try:
            sim = Simulation(
                config=config,
                levels=dict(args.level),
                milestones=dict(args.milestone),
                duration=args.duration,
                tick_resolution=args.tick_resolution,
                multiplier=args.multiplier,
                snapshot_interval=args.snapshot_interval,
                initial_state=args.state,
            )
        except (KeyError, ValueError) as exc:
            print(f"Error: {exc}")
            sys.exit(1)

        report = sim.run()
        print(format_text_report(report))

        if args.export_csv:
            from binomialtheory.export import export_csv
            export_csv(report, args.export_csv)
            print(f"\nCSV exported to {args.export_csv}_snapshots.csv")

        if args.export_json:
            from binomialtheory.export import export_json
            export_json(report, args.export_json)
            print(f"\nJSON exported to {args.export_json}")

        if args.plot:
            from binomialtheory.visualization import plot_simulation
            plot_simulation(report, args.plot)
            print(f"\nPlot saved to {args.plot}")


if __name__ == "__main__":
    main()
