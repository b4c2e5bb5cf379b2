from __future__ import annotations

# pylint: disable=redefined-outer-name

import json
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from carsim.analysis import analyze_channel
from carsim.client import ChannelClient
from carsim.config import CarSimConfig, FieldMapping
from carsim.exceptions import CarSimConfigError, CarSimError, CarSimTransportError
from carsim.models.reading import Reading
from carsim.models.requests import LastHoursRequest, LastResultsRequest
from carsim.simulation.driver import simulate_trip


@dataclass
class FakeChannelBackend:
    """In-memory channel that answers ``/update`` and ``feeds.json``."""

    channel_id: int = 123456
    entries: list[dict[str, Any]] = field(default_factory=list)
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    fail_updates: set[int] = field(default_factory=set)
    feed_payload: Any = None

    async def get_text(self, endpoint: str, params: Mapping[str, str]) -> str:
        self.calls.append((endpoint, dict(params)))
        if endpoint == "/update":
            attempt = sum(1 for name, _ in self.calls if name == "/update")
            if attempt in self.fail_updates:
                raise CarSimTransportError("HTTP 503 from /update", status_code=503, endpoint=endpoint)
            entry = {k: v for k, v in params.items() if k != "api_key"}
            entry["entry_id"] = len(self.entries) + 1
            entry["created_at"] = "2024-05-01T12:00:00Z"
            self.entries.append(entry)
            return str(entry["entry_id"])
        if endpoint == f"/channels/{self.channel_id}/feeds.json":
            payload = self.feed_payload if self.feed_payload is not None else {"channel": {}, "feeds": self.entries}
            return json.dumps(payload)
        raise CarSimTransportError(f"HTTP 404 from {endpoint}", status_code=404, endpoint=endpoint)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        return json.loads(await self.get_text(endpoint, params))


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config() -> CarSimConfig:
    return CarSimConfig(
        write_api_key="WRITEKEY",
        read_api_key="",
        channel_id=123456,
        update_interval_seconds=15,
        trip_duration_minutes=1,
    )


@pytest.fixture
def backend() -> FakeChannelBackend:
    return FakeChannelBackend()


@pytest.mark.asyncio
async def test_publish_sends_write_key_and_mapped_fields(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    async with ChannelClient(config, transport=backend) as client:
        await client.publish(Reading(speed=3.0, rpm=930.0, fuel=100.0, temp=85.0))

    assert backend.calls == [
        (
            "/update",
            {"api_key": "WRITEKEY", "field1": "3.0", "field2": "930.0", "field3": "100.0", "field4": "85.0"},
        )
    ]


@pytest.mark.asyncio
async def test_publish_without_write_key_raises(backend: FakeChannelBackend) -> None:
    async with ChannelClient(CarSimConfig(), transport=backend) as client:
        with pytest.raises(CarSimConfigError):
            await client.publish(Reading(speed=3.0, rpm=930.0, fuel=100.0, temp=85.0))

    assert backend.calls == []


@pytest.mark.asyncio
async def test_client_requires_context_manager(config: CarSimConfig) -> None:
    client = ChannelClient(config)

    with pytest.raises(CarSimError, match="not initialized"):
        await client.publish(Reading(speed=0, rpm=800, fuel=100, temp=85))


@pytest.mark.asyncio
async def test_fetch_feeds_by_results(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    backend.entries = [
        {"entry_id": 1, "field1": "10", "field2": "1233.33"},
        {"entry_id": 2, "field1": "20", "field2": None},
    ]

    async with ChannelClient(config, transport=backend) as client:
        samples = await client.fetch_feeds(LastResultsRequest(results=100))

    assert backend.calls == [("/channels/123456/feeds.json", {"results": "100"})]
    assert [s.speed for s in samples] == [10.0, 20.0]
    assert samples[1].rpm is None


@pytest.mark.asyncio
async def test_fetch_feeds_by_hours_with_read_key(backend: FakeChannelBackend) -> None:
    config = CarSimConfig(read_api_key="READKEY", channel_id=123456)
    window = LastHoursRequest(hours=24, end=datetime(2024, 5, 2, 0, 0, 0, tzinfo=UTC))

    async with ChannelClient(config, transport=backend) as client:
        await client.fetch_feeds(window)

    _, params = backend.calls[0]
    assert params == {"start": "2024-05-01 00:00:00", "end": "2024-05-02 00:00:00", "api_key": "READKEY"}


@pytest.mark.asyncio
async def test_fetch_feeds_rejects_non_object_payload(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    backend.feed_payload = -1

    async with ChannelClient(config, transport=backend) as client:
        with pytest.raises(CarSimTransportError, match="Unexpected feed payload"):
            await client.fetch_feeds(LastResultsRequest())


@pytest.mark.asyncio
async def test_fetch_feeds_rejects_malformed_channel_object(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    backend.feed_payload = {"channel": "private", "feeds": []}

    async with ChannelClient(config, transport=backend) as client:
        with pytest.raises(CarSimTransportError, match="Unexpected feed payload"):
            await client.fetch_feeds(LastResultsRequest())


@pytest.mark.asyncio
async def test_analysis_of_malformed_feed_returns_none(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    backend.feed_payload = {"channel": "private", "feeds": []}

    async with ChannelClient(config, transport=backend) as client:
        averages = await analyze_channel(client, LastResultsRequest())

    assert averages is None


@pytest.mark.asyncio
async def test_fetch_feeds_custom_field_mapping(backend: FakeChannelBackend) -> None:
    config = CarSimConfig(channel_id=123456, fields=FieldMapping(speed="field5", rpm="field6", fuel="field7", temp="field8"))
    backend.entries = [{"entry_id": 1, "field1": "999", "field5": "42.5", "field8": "90"}]

    async with ChannelClient(config, transport=backend) as client:
        samples = await client.fetch_feeds(LastResultsRequest())

    assert samples[0].speed == 42.5
    assert samples[0].temp == 90.0
    assert samples[0].rpm is None


@pytest.mark.asyncio
async def test_trip_then_analysis_round_trip(config: CarSimConfig, backend: FakeChannelBackend) -> None:
    clock = FakeClock()
    backend.fail_updates = {2}

    async with ChannelClient(config, transport=backend) as client:
        summary = await simulate_trip(client, config, rng=random.Random(11), clock=clock, sleep=clock.sleep)
        averages = await analyze_channel(client, LastResultsRequest(results=100))

    assert summary.ticks == 4
    assert summary.failed == 1
    assert len(backend.entries) == 3

    assert averages is not None
    assert averages.sample_count == 3
    speeds = [float(entry["field1"]) for entry in backend.entries]
    assert averages.speed == pytest.approx(sum(speeds) / 3)
    assert averages.fuel is not None and averages.fuel <= 100.0


@pytest.mark.asyncio
async def test_analysis_fetch_failure_returns_none(backend: FakeChannelBackend) -> None:
    config = CarSimConfig(channel_id=999)

    async with ChannelClient(config, transport=backend) as client:
        averages = await analyze_channel(client, LastResultsRequest())

    assert averages is None
