"""Fixed-interval trip loop.

Steps the vehicle model once per tick until the trip duration has
elapsed, hands each reading to the presentation callback and publishes
it. A failed publish is logged and the trip goes on.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import random
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from carsim.config import CarSimConfig
from carsim.exceptions import CarSimTransportError
from carsim.models.reading import Reading
from carsim.simulation.model import RandomSource, VehicleState, step

_logger = logging.getLogger(__name__)

TickCallback = Callable[[int, float, Reading], None]
"""``(tick_number, elapsed_seconds, reading)`` presentation hook."""


class Publisher(Protocol):
    async def publish(self, reading: Reading) -> None:
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class TripSummary:
    """Counters and final state of a completed trip."""

    ticks: int
    published: int
    failed: int
    final_state: VehicleState
    elapsed_seconds: float


class TripDriver:
    """Runs one simulated trip against a :class:`Publisher`.

    *clock* and *sleep* default to :func:`time.monotonic` and
    :func:`asyncio.sleep`; tests replace both with a fake clock.
    """

    def __init__(
        self,
        publisher: Publisher,
        *,
        interval_seconds: float,
        duration_minutes: float,
        rng: RandomSource | None = None,
        initial_state: VehicleState | None = None,
        on_tick: TickCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._publisher = publisher
        self._interval = interval_seconds
        self._duration = duration_minutes * 60
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._state = initial_state if initial_state is not None else VehicleState()
        self._on_tick = on_tick
        self._clock = clock
        self._sleep = sleep

    @property
    def state(self) -> VehicleState:
        return self._state

    async def _publish(self, tick: int, reading: Reading) -> bool:
        try:
            await self._publisher.publish(reading)
        except CarSimTransportError as exc:
            _logger.warning("Tick %d: failed to publish reading: %s", tick, exc)
            return False
        return True

    async def run(self) -> TripSummary:
        """Run ticks until the trip duration has elapsed.

        The deadline is checked only at tick boundaries, so a tick that
        starts before it always completes and is reported.
        """
        start = self._clock()
        ticks = published = failed = 0

        while self._clock() - start < self._duration:
            ticks += 1
            outcome = step(self._state, self._interval, self._rng)
            self._state = outcome.state
            reading = outcome.reading()

            elapsed = self._clock() - start
            _logger.debug("Tick %d (%s) at %.1fs: %s", ticks, outcome.phase.value, elapsed, reading.model_dump())
            if self._on_tick is not None:
                self._on_tick(ticks, elapsed, reading)

            if await self._publish(ticks, reading):
                published += 1
            else:
                failed += 1

            await self._sleep(self._interval)

        summary = TripSummary(
            ticks=ticks,
            published=published,
            failed=failed,
            final_state=self._state,
            elapsed_seconds=self._clock() - start,
        )
        _logger.info("Trip finished: %d ticks, %d published, %d failed", ticks, published, failed)
        return summary


async def simulate_trip(
    publisher: Publisher,
    config: CarSimConfig,
    *,
    rng: RandomSource | None = None,
    on_tick: TickCallback | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> TripSummary:
    """Run a trip using the interval and duration from *config*.

    Raises
    ------
    CarSimConfigError
        If no write key is configured. Nothing is simulated in that case.
    """
    config.require_write_key()
    driver = TripDriver(
        publisher,
        interval_seconds=config.update_interval_seconds,
        duration_minutes=config.trip_duration_minutes,
        rng=rng,
        on_tick=on_tick,
        clock=clock,
        sleep=sleep,
    )
    return await driver.run()
