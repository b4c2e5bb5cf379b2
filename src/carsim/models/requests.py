"""Pydantic request models for feed reads.

A feed read selects either a time window or a result count, never both.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carsim._constants import FEED_TIME_FORMAT


class _FeedRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )


class LastHoursRequest(_FeedRequest):
    """Readings recorded in the ``hours`` leading up to ``end``."""

    hours: float = Field(default=24, gt=0)
    end: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("end")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @property
    def start(self) -> datetime:
        return self.end - timedelta(hours=self.hours)

    def to_params(self) -> dict[str, str]:
        return {
            "start": self.start.strftime(FEED_TIME_FORMAT),
            "end": self.end.strftime(FEED_TIME_FORMAT),
        }


class LastResultsRequest(_FeedRequest):
    """The most recent ``results`` readings."""

    results: int = Field(default=100, ge=1)

    def to_params(self) -> dict[str, str]:
        return {"results": str(self.results)}


FeedWindow = LastHoursRequest | LastResultsRequest
