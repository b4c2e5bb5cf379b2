"""Channel update endpoint.

Endpoint:
  - /update (GET, one reading per request)
"""

from __future__ import annotations

import logging

from carsim._constants import UPDATE_ENDPOINT
from carsim._transport import Transport
from carsim.config import CarSimConfig
from carsim.models.reading import Reading

_logger = logging.getLogger(__name__)


def build_update_params(config: CarSimConfig, reading: Reading) -> dict[str, str]:
    """Build the query for one reading: write key followed by the four fields."""
    params = {"api_key": config.require_write_key()}
    params.update(reading.to_fields(config.fields))
    return params


async def publish_reading(config: CarSimConfig, transport: Transport, reading: Reading) -> None:
    """Send *reading* to the channel.

    The response body is not inspected; any 2xx status counts as
    accepted.

    Raises
    ------
    CarSimConfigError
        If no write key is configured.
    CarSimTransportError
        On network failure or a non-2xx status.
    """
    params = build_update_params(config, reading)
    await transport.get_text(UPDATE_ENDPOINT, params)
    _logger.debug("Published reading %s", reading.model_dump())
