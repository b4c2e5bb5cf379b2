"""HTTP transport for the channel API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from carsim._constants import USER_AGENT
from carsim._redact import redact_params, redact_url
from carsim.config import CarSimConfig
from carsim.exceptions import CarSimTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, endpoint: str, params: Mapping[str, str]) -> str:
        ...

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """GET-only transport with status and JSON error mapping."""

    def __init__(self, config: CarSimConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, endpoint: str, params: Mapping[str, str]) -> str:
        """Issue a GET and return the body text.

        Raises
        ------
        CarSimTransportError
            On network errors, timeouts and non-2xx statuses.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {"user-agent": USER_AGENT}

        _logger.debug("GET %s params=%s", url, redact_params(params))

        try:
            async with self._http.get(url, params=dict(params), headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                _logger.debug("GET %s -> HTTP %d", redact_url(str(resp.url)), resp.status)
                if not 200 <= resp.status < 300:
                    raise CarSimTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except CarSimTransportError:
            raise
        except TimeoutError as exc:
            raise CarSimTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise CarSimTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        return text

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        """Issue a GET and decode the body as JSON."""
        text = await self.get_text(endpoint, params)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise CarSimTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
