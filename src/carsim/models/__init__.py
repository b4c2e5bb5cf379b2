"""Data models for readings and channel feeds."""

from carsim.models._base import CarSimBaseModel
from carsim.models.feed import ChannelFeed, FeedAverages, FeedSample
from carsim.models.reading import Reading
from carsim.models.requests import FeedWindow, LastHoursRequest, LastResultsRequest

__all__ = [
    "CarSimBaseModel",
    "ChannelFeed",
    "FeedAverages",
    "FeedSample",
    "FeedWindow",
    "LastHoursRequest",
    "LastResultsRequest",
    "Reading",
]
