"""Console presentation for trips and channel analysis."""

from __future__ import annotations

import sys
from typing import TextIO

from carsim.models.feed import FeedAverages
from carsim.models.reading import Reading

NO_DATA = "no data"

_TABLE_TOP = "┌─────────┬──────────┬──────────┬──────────┬──────────┐"
_TABLE_HEAD = (
    "│  TIME s │  SPEED   │   RPM    │   FUEL   │   TEMP   │",
    "│         │ (km/h)   │          │    (%)   │   (°C)   │",
)
_TABLE_RULE = "├─────────┼──────────┼──────────┼──────────┼──────────┤"
_TABLE_BOTTOM = "└─────────┴──────────┴──────────┴──────────┴──────────┘"

_BOX_WIDTH = 72


def _banner(title: str, out: TextIO) -> None:
    print("╔" + "═" * _BOX_WIDTH + "╗", file=out)
    print("║" + title.center(_BOX_WIDTH) + "║", file=out)
    print("╚" + "═" * _BOX_WIDTH + "╝", file=out)
    print(file=out)


def format_reading_row(elapsed_seconds: float, reading: Reading) -> str:
    """One table row; transmission precision is reduced for display."""
    return (
        f"│ {elapsed_seconds:7.0f} │ {reading.speed:8.0f} │ {reading.rpm:8.0f} │"
        f" {reading.fuel:8.1f} │ {reading.temp:8.0f} │"
    )


def format_average_row(label: str, value: float | None, unit: str = "", *, decimals: int = 1) -> str:
    if value is None:
        text = NO_DATA
    else:
        text = f"{value:.{decimals}f} {unit}".strip()
    return f"│  {label:<22}: {text:<{_BOX_WIDTH - 26}}│"


class TripTable:
    """Streams the trip table: header on the first row, footer on close."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._header_printed = False

    def banner(self) -> None:
        _banner("Car Telemetry Simulator", self._out)
        print("Starting telemetry (4 fields: speed, RPM, fuel, temp) ...", file=self._out)
        print(file=self._out)

    def row(self, tick: int, elapsed_seconds: float, reading: Reading) -> None:
        if not self._header_printed:
            print(_TABLE_TOP, file=self._out)
            for line in _TABLE_HEAD:
                print(line, file=self._out)
            print(_TABLE_RULE, file=self._out)
            self._header_printed = True
        print(format_reading_row(elapsed_seconds, reading), file=self._out, flush=True)

    def close(self) -> None:
        if self._header_printed:
            print(_TABLE_BOTTOM, file=self._out)
        print(file=self._out)
        print("Trip finished, transmission complete.", file=self._out)


def print_analysis_banner(out: TextIO | None = None) -> None:
    _banner("Channel Data Analysis", out if out is not None else sys.stdout)


def print_averages(averages: FeedAverages, out: TextIO | None = None) -> None:
    """Render the averages box with a "no data" fallback per value."""
    out = out if out is not None else sys.stdout
    title = " ANALYSIS "
    print(file=out)
    print("┌" + title.center(_BOX_WIDTH, "─") + "┐", file=out)
    print("│" + f"  Averages over {averages.sample_count} data points".ljust(_BOX_WIDTH) + "│", file=out)
    print("├" + "─" * _BOX_WIDTH + "┤", file=out)
    print(format_average_row("Average speed", averages.speed, "km/h"), file=out)
    print(format_average_row("Average RPM", averages.rpm, decimals=0), file=out)
    print(format_average_row("Average fuel", averages.fuel, "%"), file=out)
    print(format_average_row("Average temp", averages.temp, "°C"), file=out)
    print("└" + "─" * _BOX_WIDTH + "┘", file=out)
    print(file=out)
