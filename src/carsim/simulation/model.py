"""Vehicle state model.

Turns the previous (speed, RPM, fuel) state into the next one and
samples an engine temperature for the tick. Pure apart from the
injected random source; no I/O.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Protocol

from carsim._constants import (
    ACCELERATING_BELOW,
    BASE_ENGINE_TEMP,
    DECELERATING_FROM,
    ENGINE_TEMP_NOISE_STOP,
    FULL_TANK,
    IDLE_RPM,
    MAX_ENGINE_TEMP,
    MAX_FUEL_CONSUMPTION_PER_SECOND,
    MAX_RPM,
    MAX_SPEED,
    MIN_ENGINE_TEMP,
    MIN_SPEED,
)
from carsim.models.reading import Reading


class RandomSource(Protocol):
    """Randomness capability used by the model.

    :class:`random.Random` satisfies this protocol; tests pass a seeded
    instance or a scripted fake.
    """

    def randrange(self, start: int, stop: int) -> int:
        """Return an int in ``[start, stop)``."""
        ...

    def random(self) -> float:
        """Return a float in ``[0, 1)``."""
        ...


class Phase(enum.Enum):
    """Kinematic regime selected from the current speed."""

    ACCELERATING = "accelerating"
    CRUISING = "cruising"
    DECELERATING = "decelerating"

    @classmethod
    def for_speed(cls, speed: float) -> Phase:
        # Boundaries belong to the higher band.
        if speed < ACCELERATING_BELOW:
            return cls.ACCELERATING
        if speed < DECELERATING_FROM:
            return cls.CRUISING
        return cls.DECELERATING


@dataclasses.dataclass(frozen=True, slots=True)
class VehicleState:
    """Vehicle state carried from tick to tick.

    ``rpm`` is always derived from ``speed`` via :func:`calc_rpm`.
    """

    speed: float = MIN_SPEED
    rpm: float = IDLE_RPM
    fuel: float = FULL_TANK


@dataclasses.dataclass(frozen=True, slots=True)
class TickOutcome:
    """Result of advancing the model by one tick."""

    phase: Phase
    state: VehicleState
    temp: float

    def reading(self) -> Reading:
        return Reading.rounded(
            speed=self.state.speed,
            rpm=self.state.rpm,
            fuel=self.state.fuel,
            temp=self.temp,
        )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calc_rpm(speed: float) -> float:
    """Idle below 1 km/h, otherwise linear between idle and max RPM."""
    if speed < 1:
        return IDLE_RPM
    return IDLE_RPM + (speed / MAX_SPEED) * (MAX_RPM - IDLE_RPM)


def fuel_rate(speed: float, rpm: float) -> float:
    """Fuel percentage consumed per second at the given load."""
    return (speed / MAX_SPEED) * (rpm / MAX_RPM) * MAX_FUEL_CONSUMPTION_PER_SECOND


def speed_delta(phase: Phase, rng: RandomSource) -> float:
    if phase is Phase.ACCELERATING:
        return float(rng.randrange(2, 5))
    if phase is Phase.CRUISING:
        return rng.random() * 2 - 1
    return -float(rng.randrange(2, 5))


def engine_temp(speed: float, rng: RandomSource) -> float:
    """Sample an engine temperature; no memory of earlier ticks."""
    factor = speed / MAX_SPEED
    temp = BASE_ENGINE_TEMP + factor * rng.randrange(0, ENGINE_TEMP_NOISE_STOP)
    return _clamp(temp, MIN_ENGINE_TEMP, MAX_ENGINE_TEMP)


def step(state: VehicleState, tick_seconds: float, rng: RandomSource) -> TickOutcome:
    """Advance *state* by one tick of *tick_seconds*.

    Phase is chosen from the speed before the step, the speed delta is
    applied and clamped, RPM is recomputed and fuel is burnt for the
    whole tick. Fuel never increases and floors at zero.
    """
    phase = Phase.for_speed(state.speed)
    speed = _clamp(state.speed + speed_delta(phase, rng), MIN_SPEED, MAX_SPEED)
    rpm = calc_rpm(speed)
    fuel = max(0.0, state.fuel - fuel_rate(speed, rpm) * tick_seconds)
    next_state = VehicleState(speed=speed, rpm=rpm, fuel=fuel)
    return TickOutcome(phase=phase, state=next_state, temp=engine_temp(speed, rng))
