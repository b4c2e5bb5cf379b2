"""Vehicle state model and trip loop."""

from carsim.simulation.driver import Publisher, TickCallback, TripDriver, TripSummary, simulate_trip
from carsim.simulation.model import (
    Phase,
    RandomSource,
    TickOutcome,
    VehicleState,
    calc_rpm,
    engine_temp,
    fuel_rate,
    step,
)

__all__ = [
    "Phase",
    "Publisher",
    "RandomSource",
    "TickCallback",
    "TickOutcome",
    "TripDriver",
    "TripSummary",
    "VehicleState",
    "calc_rpm",
    "engine_temp",
    "fuel_rate",
    "simulate_trip",
    "step",
]
