"""Custom exception hierarchy for carsim."""

from __future__ import annotations


class CarSimError(Exception):
    """Base exception for all carsim errors."""


class CarSimConfigError(CarSimError):
    """Invalid or missing configuration."""


class CarSimTransportError(CarSimError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
