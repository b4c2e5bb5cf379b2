"""High-level async client for the telemetry channel API."""

from __future__ import annotations

from typing import Any

import aiohttp

from carsim._api.feeds import fetch_feed_samples
from carsim._api.update import publish_reading
from carsim._transport import HttpTransport, Transport
from carsim.config import CarSimConfig
from carsim.exceptions import CarSimError
from carsim.models.feed import FeedSample
from carsim.models.reading import Reading
from carsim.models.requests import FeedWindow


class ChannelClient:
    """Async client that publishes readings to and reads feeds from a channel.

    Usage::

        async with ChannelClient(config) as client:
            await client.publish(reading)
            samples = await client.fetch_feeds(LastResultsRequest(results=100))

    A caller-provided ``aiohttp.ClientSession`` is used as-is and left
    open on exit. A custom *transport* bypasses HTTP entirely.
    """

    def __init__(
        self,
        config: CarSimConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._custom_transport = transport is not None

    @property
    def config(self) -> CarSimConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ChannelClient:
        if self._custom_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._custom_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise CarSimError("Client not initialized. Use 'async with ChannelClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def publish(self, reading: Reading) -> None:
        """Publish one reading. Raises on any transport failure."""
        await publish_reading(self._config, self._require_transport(), reading)

    async def fetch_feeds(self, window: FeedWindow) -> list[FeedSample]:
        """Fetch the samples recorded in *window*."""
        return await fetch_feed_samples(self._config, self._require_transport(), window)
