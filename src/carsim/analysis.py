"""Feed aggregation.

Reduces fetched samples to per-value averages. Each value is averaged
over the samples that actually carry it; missing values never count
towards a denominator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from carsim.exceptions import CarSimTransportError
from carsim.models.feed import FeedAverages, FeedSample
from carsim.models.requests import FeedWindow

_logger = logging.getLogger(__name__)

_VALUE_FIELDS: tuple[str, ...] = ("speed", "rpm", "fuel", "temp")


class FeedReader(Protocol):
    async def fetch_feeds(self, window: FeedWindow) -> list[FeedSample]:
        ...


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def average_feeds(samples: Iterable[FeedSample]) -> FeedAverages:
    """Average every value independently across *samples*.

    A value with no valid entries is ``None``. An empty input yields
    all ``None`` and ``sample_count == 0``.
    """
    collected: dict[str, list[float]] = {name: [] for name in _VALUE_FIELDS}
    count = 0
    for sample in samples:
        count += 1
        for name in _VALUE_FIELDS:
            value = getattr(sample, name)
            if value is not None:
                collected[name].append(value)

    return FeedAverages(
        speed=_mean(collected["speed"]),
        rpm=_mean(collected["rpm"]),
        fuel=_mean(collected["fuel"]),
        temp=_mean(collected["temp"]),
        sample_count=count,
    )


async def analyze_channel(reader: FeedReader, window: FeedWindow) -> FeedAverages | None:
    """Fetch *window* and average it.

    Returns ``None`` when the fetch fails; no partial averages are
    computed in that case. An empty feed returns averages with every
    value ``None``.
    """
    try:
        samples = await reader.fetch_feeds(window)
    except CarSimTransportError as exc:
        _logger.error("Could not fetch channel feed: %s", exc)
        return None

    if not samples:
        _logger.info("No data points found for the selected window")
    return average_feeds(samples)
