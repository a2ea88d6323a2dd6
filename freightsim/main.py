"""Freightsim: discrete-event simulation of a logistics network.

Entry point for running the simulation.
"""

import argparse
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from freightsim import __version__
from freightsim.config import reload_config
from freightsim.core.errors import SimulationError
from freightsim.observation.logger import SimulationLogger, setup_logging

console = Console()
sim_logger = SimulationLogger()


def parse_target(value: str) -> tuple[str, int]:
    """Parse an ``ID=COUNT`` delivery target."""
    ident, sep, count = value.partition("=")
    if not sep or not ident:
        raise argparse.ArgumentTypeError(f"expected ID=COUNT, got {value!r}")
    try:
        return ident, int(count)
    except ValueError:
        raise argparse.ArgumentTypeError(f"count must be an integer, got {count!r}")


def positive_int(value: str) -> int:
    """Parse an integer that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_deliveries_table(engine) -> Table:
    """Create a table of deliveries per destination."""
    table = Table(title="Deliveries", show_header=True)
    table.add_column("Destination", style="cyan")
    table.add_column("Received", style="green")
    table.add_column("First at tick", style="magenta")

    metrics = engine.get_metrics()
    first = metrics.get("ticks", {}).get("first_delivery", {})
    for ident, count in metrics["deliveries"].items():
        table.add_row(ident, str(count), str(first.get(ident, "-")))

    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Freightsim: discrete-event logistics simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  freightsim                          Stop once a or b has its deliveries
  freightsim --until all              Wait for every target
  freightsim --target b=2 --until all Only wait for two deliveries at b
  freightsim --strict                 Reject unroutable events
        """,
    )

    parser.add_argument(
        "--target",
        type=parse_target,
        action="append",
        default=None,
        metavar="ID=COUNT",
        help="Deliveries required at a destination (repeatable, default: a=1 b=2)",
    )

    parser.add_argument(
        "--until",
        choices=["all", "any"],
        default="any",
        help="Stop when any target is met or only when all are (default: any)",
    )

    parser.add_argument(
        "--max-ticks",
        type=positive_int,
        default=None,
        help="Give up after this many ticks (default: from config)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on events scheduled in the past or for unknown locations",
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"Freightsim {__version__}",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (all messages)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    from freightsim.core.engine import DEFAULT_TARGETS, run_simulation

    args = build_parser().parse_args(argv)

    # Load config first so we can modify it
    config = reload_config()

    if args.debug:
        config.log_level = "DEBUG"
    elif args.log_level:
        config.log_level = args.log_level

    if args.strict:
        config.simulation.strict_scheduling = True

    setup_logging(config.log_level)

    targets = dict(args.target) if args.target else dict(DEFAULT_TARGETS)

    try:
        engine = run_simulation(
            targets=targets,
            require=args.until,
            max_ticks=args.max_ticks,
            config=config,
        )

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 130

    except SimulationError as e:
        console.print(f"[red]Simulation failed: {e}[/red]")
        sim_logger.error("simulation_failed", error=str(e))
        return 1

    console.print(Panel.fit(
        f"[bold]Simulation Complete[/bold]\n\n"
        f"Took {engine.elapsed} time-units to ship all products",
        border_style="green",
    ))
    console.print(create_deliveries_table(engine))
    return 0


if __name__ == "__main__":
    sys.exit(main())
