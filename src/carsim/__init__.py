"""carsim - Simulated car telemetry publisher and channel analyzer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("carsim")
except PackageNotFoundError:
    __version__ = "0+local"
from carsim.analysis import analyze_channel, average_feeds
from carsim.client import ChannelClient
from carsim.config import CarSimConfig, FieldMapping
from carsim.exceptions import CarSimConfigError, CarSimError, CarSimTransportError
from carsim.models import (
    ChannelFeed,
    FeedAverages,
    FeedSample,
    FeedWindow,
    LastHoursRequest,
    LastResultsRequest,
    Reading,
)
from carsim.simulation import Phase, TripDriver, TripSummary, VehicleState, simulate_trip, step

__all__ = [
    "__version__",
    "CarSimConfig",
    "CarSimConfigError",
    "CarSimError",
    "CarSimTransportError",
    "ChannelClient",
    "ChannelFeed",
    "FeedAverages",
    "FeedSample",
    "FeedWindow",
    "FieldMapping",
    "LastHoursRequest",
    "LastResultsRequest",
    "Phase",
    "Reading",
    "TripDriver",
    "TripSummary",
    "VehicleState",
    "analyze_channel",
    "average_feeds",
    "simulate_trip",
    "step",
]
