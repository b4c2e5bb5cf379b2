"""Channel feed models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carsim._normalize import safe_datetime, safe_float, safe_int
from carsim.config import FieldMapping
from carsim.models._base import CarSimBaseModel


class FeedSample(CarSimBaseModel):
    """One historical reading fetched from the channel.

    Every value is parsed independently; a value that is missing or
    unparseable is ``None`` and does not affect the other values of
    the same sample.

    Parameters
    ----------
    speed : float or None
        Speed in km/h.
    rpm : float or None
        Engine speed.
    fuel : float or None
        Fuel level in percent.
    temp : float or None
        Engine temperature in °C.
    entry_id : int or None
        Channel entry number.
    created_at : datetime or None
        When the channel recorded the entry (UTC).
    raw : dict
        The feed entry as received.
    """

    speed: float | None = None
    rpm: float | None = None
    fuel: float | None = None
    temp: float | None = None
    entry_id: int | None = None
    created_at: datetime | None = None

    @field_validator("speed", "rpm", "fuel", "temp", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("entry_id", mode="before")
    @classmethod
    def _coerce_entry_id(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value: Any) -> datetime | None:
        return safe_datetime(value)

    @classmethod
    def from_feed(cls, entry: dict[str, Any], fields: FieldMapping) -> FeedSample:
        """Parse a raw feed entry using the channel field mapping."""
        return cls.model_validate(
            {
                "speed": entry.get(fields.speed),
                "rpm": entry.get(fields.rpm),
                "fuel": entry.get(fields.fuel),
                "temp": entry.get(fields.temp),
                "entry_id": entry.get("entry_id"),
                "created_at": entry.get("created_at"),
                "raw": entry,
            }
        )


class ChannelFeed(CarSimBaseModel):
    """The ``feeds.json`` response: channel metadata plus feed entries."""

    channel: dict[str, Any] = Field(default_factory=dict)
    feeds: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("feeds", mode="before")
    @classmethod
    def _only_dict_entries(cls, value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict)]

    def samples(self, fields: FieldMapping) -> list[FeedSample]:
        return [FeedSample.from_feed(entry, fields) for entry in self.feeds]


class FeedAverages(BaseModel):
    """Per-value averages over a set of feed samples.

    A value is ``None`` when no sample carried a valid number for it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    speed: float | None = None
    rpm: float | None = None
    fuel: float | None = None
    temp: float | None = None
    sample_count: int = 0

    @property
    def has_data(self) -> bool:
        return any(value is not None for value in (self.speed, self.rpm, self.fuel, self.temp))
