"""Channel feed endpoint.

Endpoint:
  - /channels/{channel_id}/feeds.json (GET, time window or result count)
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from carsim._constants import FEEDS_ENDPOINT_TEMPLATE
from carsim._transport import Transport
from carsim.config import CarSimConfig
from carsim.exceptions import CarSimTransportError
from carsim.models.feed import ChannelFeed, FeedSample
from carsim.models.requests import FeedWindow

_logger = logging.getLogger(__name__)


def build_feed_params(config: CarSimConfig, window: FeedWindow) -> dict[str, str]:
    """Build the query for *window*; the read key is only sent when set."""
    params = window.to_params()
    read_key = config.read_api_key.strip()
    if read_key:
        params["api_key"] = read_key
    return params


async def fetch_feed_samples(
    config: CarSimConfig,
    transport: Transport,
    window: FeedWindow,
) -> list[FeedSample]:
    """Fetch the channel feed for *window* and parse it into samples.

    Raises
    ------
    CarSimTransportError
        On network failure, a non-2xx status, or a body that is not a
        feed object (private channels answer ``-1`` without a key).
    """
    endpoint = FEEDS_ENDPOINT_TEMPLATE.format(channel_id=config.channel_id)
    decoded = await transport.get_json(endpoint, build_feed_params(config, window))
    if not isinstance(decoded, dict):
        raise CarSimTransportError(
            f"Unexpected feed payload from {endpoint}: {str(decoded)[:64]}",
            endpoint=endpoint,
        )

    try:
        feed = ChannelFeed.model_validate(decoded)
    except ValidationError as exc:
        raise CarSimTransportError(
            f"Unexpected feed payload from {endpoint}: {exc.error_count()} invalid field(s)",
            endpoint=endpoint,
        ) from exc
    samples = feed.samples(config.fields)
    _logger.debug("Fetched %d feed entries from %s", len(samples), endpoint)
    return samples
