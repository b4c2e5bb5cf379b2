"""Tests for reading, feed and request models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from carsim.config import FieldMapping
from carsim.models.feed import ChannelFeed, FeedAverages, FeedSample
from carsim.models.reading import Reading
from carsim.models.requests import LastHoursRequest, LastResultsRequest

# ------------------------------------------------------------------
# Reading
# ------------------------------------------------------------------


class TestReading:
    def test_rounded_to_two_decimals(self) -> None:
        reading = Reading.rounded(speed=33.456, rpm=2249.7777, fuel=99.98765, temp=91.004)

        assert reading.speed == 33.46
        assert reading.rpm == 2249.78
        assert reading.fuel == 99.99
        assert reading.temp == 91.0

    def test_to_fields_uses_mapping(self) -> None:
        reading = Reading(speed=12.5, rpm=1341.67, fuel=99.9, temp=86.0)
        fields = FieldMapping(speed="field4", rpm="field3", fuel="field2", temp="field1")

        assert reading.to_fields(fields) == {
            "field4": "12.5",
            "field3": "1341.67",
            "field2": "99.9",
            "field1": "86.0",
        }

    def test_frozen(self) -> None:
        reading = Reading(speed=1, rpm=800, fuel=100, temp=85)
        with pytest.raises(ValidationError):
            reading.speed = 2  # type: ignore[misc]


# ------------------------------------------------------------------
# FeedSample / ChannelFeed
# ------------------------------------------------------------------


class TestFeedSample:
    ENTRY: dict = {
        "created_at": "2024-05-01T12:00:15Z",
        "entry_id": 42,
        "field1": "57.31",
        "field2": "3283.43",
        "field3": "97.12",
        "field4": "89.0",
    }

    def test_from_feed_default_mapping(self) -> None:
        sample = FeedSample.from_feed(self.ENTRY, FieldMapping())

        assert sample.speed == 57.31
        assert sample.rpm == 3283.43
        assert sample.fuel == 97.12
        assert sample.temp == 89.0
        assert sample.entry_id == 42
        assert sample.created_at == datetime(2024, 5, 1, 12, 0, 15, tzinfo=UTC)
        assert sample.raw == self.ENTRY

    def test_from_feed_custom_mapping(self) -> None:
        fields = FieldMapping(speed="field4", rpm="field3", fuel="field2", temp="field1")
        sample = FeedSample.from_feed(self.ENTRY, fields)

        assert sample.speed == 89.0
        assert sample.temp == 57.31

    @pytest.mark.parametrize("bad", [None, "", "--", "abc", "NaN", "inf", True])
    def test_unparseable_value_is_none_without_affecting_others(self, bad: object) -> None:
        entry = dict(self.ENTRY, field3=bad)
        sample = FeedSample.from_feed(entry, FieldMapping())

        assert sample.fuel is None
        assert sample.speed == 57.31
        assert sample.rpm == 3283.43
        assert sample.temp == 89.0

    def test_missing_keys(self) -> None:
        sample = FeedSample.from_feed({"entry_id": "7"}, FieldMapping())

        assert sample.speed is None
        assert sample.rpm is None
        assert sample.entry_id == 7
        assert sample.created_at is None

    def test_invalid_timestamp_is_none(self) -> None:
        sample = FeedSample.from_feed({"created_at": "yesterday", "field1": "5"}, FieldMapping())

        assert sample.created_at is None
        assert sample.speed == 5.0

    def test_numbers_accepted_as_is(self) -> None:
        sample = FeedSample.model_validate({"speed": 12, "rpm": 1320.5})
        assert sample.speed == 12.0
        assert sample.rpm == 1320.5


class TestChannelFeed:
    PAYLOAD: dict = {
        "channel": {"id": 123456, "name": "Car", "field1": "Speed", "last_entry_id": 3},
        "feeds": [
            {"created_at": "2024-05-01T12:00:00Z", "entry_id": 1, "field1": "3", "field2": "930", "field3": "100"},
            {"created_at": "2024-05-01T12:00:15Z", "entry_id": 2, "field1": "7", "field2": None, "field3": "99.99"},
            "garbage",
            {"created_at": "2024-05-01T12:00:30Z", "entry_id": 3, "field4": "86"},
        ],
    }

    def test_samples(self) -> None:
        feed = ChannelFeed.model_validate(self.PAYLOAD)
        samples = feed.samples(FieldMapping())

        assert feed.channel["id"] == 123456
        assert [s.entry_id for s in samples] == [1, 2, 3]
        assert samples[1].rpm is None
        assert samples[2].temp == 86.0
        assert feed.raw == self.PAYLOAD

    def test_missing_or_null_feeds(self) -> None:
        assert ChannelFeed.model_validate({"channel": {}}).feeds == []
        assert ChannelFeed.model_validate({"feeds": None}).feeds == []
        assert ChannelFeed.model_validate({"feeds": "nope"}).feeds == []


def test_feed_averages_has_data() -> None:
    assert FeedAverages().has_data is False
    assert FeedAverages(temp=88.0, sample_count=1).has_data is True


# ------------------------------------------------------------------
# Feed requests
# ------------------------------------------------------------------


class TestFeedRequests:
    def test_last_results_params(self) -> None:
        assert LastResultsRequest().to_params() == {"results": "100"}
        assert LastResultsRequest(results=8).to_params() == {"results": "8"}

    def test_last_results_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LastResultsRequest(results=0)

    def test_last_hours_params(self) -> None:
        end = datetime(2024, 5, 2, 8, 30, 0, tzinfo=UTC)
        request = LastHoursRequest(hours=24, end=end)

        assert request.start == datetime(2024, 5, 1, 8, 30, 0, tzinfo=UTC)
        assert request.to_params() == {"start": "2024-05-01 08:30:00", "end": "2024-05-02 08:30:00"}

    def test_last_hours_end_converted_to_utc(self) -> None:
        end = datetime(2024, 5, 2, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        request = LastHoursRequest(hours=1, end=end)

        assert request.to_params() == {"start": "2024-05-02 07:00:00", "end": "2024-05-02 08:00:00"}

    def test_last_hours_naive_end_treated_as_utc(self) -> None:
        request = LastHoursRequest(hours=2, end=datetime(2024, 1, 1, 2, 0, 0))
        assert request.end.tzinfo is UTC
        assert request.to_params()["start"] == "2024-01-01 00:00:00"

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LastResultsRequest(results=10, hours=24)  # type: ignore[call-arg]
