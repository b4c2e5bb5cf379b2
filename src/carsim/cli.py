"""Command line entry point.

Usage
-----
Publish a simulated trip::

    export CARSIM_WRITE_API_KEY="XXXXXXXXXXXXXXXX"
    carsim simulate --interval 15 --duration 10

Average what the channel recorded::

    carsim analyze --settings appsettings.json --results 100
    carsim analyze --hours 24
    carsim analyze            # interactive menu

Settings come from ``--settings FILE``, else ``./appsettings.json`` when
present, else ``CARSIM_*`` environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from carsim import __version__
from carsim.analysis import analyze_channel
from carsim.client import ChannelClient
from carsim.config import CarSimConfig
from carsim.console import TripTable, print_analysis_banner, print_averages
from carsim.exceptions import CarSimConfigError
from carsim.models.requests import FeedWindow, LastHoursRequest, LastResultsRequest
from carsim.simulation.driver import simulate_trip

_logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "appsettings.json"

_MENU_CHOICES: dict[str, Callable[[], FeedWindow]] = {
    "1": lambda: LastHoursRequest(hours=24),
    "2": lambda: LastResultsRequest(results=100),
}


def load_config(settings: str | None, **overrides: Any) -> CarSimConfig:
    """Resolve configuration from a settings file or the environment."""
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if settings is not None:
        return CarSimConfig.from_file(settings, **overrides)
    if Path(DEFAULT_SETTINGS_FILE).is_file():
        return CarSimConfig.from_file(DEFAULT_SETTINGS_FILE, **overrides)
    return CarSimConfig.from_env(**overrides)


def _prompt_window() -> FeedWindow | None:
    print("Choose what to analyze:")
    print("  [1]  Last 24 hours")
    print("  [2]  Last 100 data points")
    choice = input("Your choice (1/2): ").strip()
    factory = _MENU_CHOICES.get(choice)
    return factory() if factory is not None else None


def _window_from_args(args: argparse.Namespace) -> FeedWindow | None:
    if args.hours is not None:
        return LastHoursRequest(hours=args.hours)
    if args.results is not None:
        return LastResultsRequest(results=args.results)
    return _prompt_window()


async def _run_simulate(args: argparse.Namespace) -> int:
    config = load_config(
        args.settings,
        update_interval_seconds=args.interval,
        trip_duration_minutes=args.duration,
    )
    config.require_write_key()

    table = TripTable()
    table.banner()
    rng = random.Random(args.seed) if args.seed is not None else None
    async with ChannelClient(config) as client:
        try:
            summary = await simulate_trip(client, config, rng=rng, on_tick=table.row)
        finally:
            table.close()

    if summary.failed:
        _logger.warning("%d of %d readings could not be published", summary.failed, summary.ticks)
    return 0


async def _run_analyze(args: argparse.Namespace) -> int:
    config = load_config(args.settings)
    print_analysis_banner()

    window = _window_from_args(args)
    if window is None:
        _logger.warning("Invalid choice, nothing to analyze")
        return 0

    async with ChannelClient(config) as client:
        averages = await analyze_channel(client, window)

    if averages is None:
        return 0
    if averages.sample_count == 0:
        print("No data points found for the selected period.")
        return 0
    print_averages(averages)
    return 0


def _positive_float(value: str) -> float:
    parsed = float(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return parsed


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="carsim", description="Simulated car telemetry publisher and analyzer")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", default=None, help="Path to an appsettings.json style file")
    parser.add_argument("--verbose", "-v", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Drive a simulated trip and publish every tick")
    simulate.add_argument("--interval", type=_positive_float, default=None, help="Seconds between ticks")
    simulate.add_argument("--duration", type=_positive_float, default=None, help="Trip length in minutes")
    simulate.add_argument("--seed", type=int, default=None, help="Seed for a reproducible trip")
    simulate.set_defaults(handler=_run_simulate)

    analyze = subparsers.add_parser("analyze", help="Average the readings stored in the channel")
    window = analyze.add_mutually_exclusive_group()
    window.add_argument("--hours", type=_positive_float, default=None, help="Analyze the last N hours")
    window.add_argument("--results", type=_positive_int, default=None, help="Analyze the last N data points")
    analyze.set_defaults(handler=_run_analyze)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(args.handler(args))
    except CarSimConfigError as exc:
        _logger.error("Configuration error: %s", exc)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
