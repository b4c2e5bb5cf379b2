"""Client and trip configuration for carsim."""

from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any

from carsim._constants import BASE_URL
from carsim.exceptions import CarSimConfigError


@dataclasses.dataclass(frozen=True)
class FieldMapping:
    """Channel field identifiers for the four telemetry values.

    The channel stores values in numbered fields; this mapping decides
    which logical value goes into which field on publish, and which field
    is read back as which value on fetch.
    """

    speed: str = "field1"
    rpm: str = "field2"
    fuel: str = "field3"
    temp: str = "field4"

    def as_dict(self) -> dict[str, str]:
        """Return ``{logical_name: field_id}`` in publish order."""
        return {
            "speed": self.speed,
            "rpm": self.rpm,
            "fuel": self.fuel,
            "temp": self.temp,
        }


@dataclasses.dataclass(frozen=True)
class CarSimConfig:
    """Client configuration.

    Parameters
    ----------
    write_api_key : str
        Channel write key. Required for publishing readings.
    read_api_key : str
        Channel read key. Only needed for private channels.
    channel_id : int
        Channel to read feeds from.
    base_url : str
        API base URL. Defaults to the public ThingSpeak endpoint.
    fields : FieldMapping
        Field identifiers for speed, RPM, fuel and temperature.
    update_interval_seconds : float
        Seconds between simulation ticks.
    trip_duration_minutes : float
        Wall-clock length of a simulated trip.
    request_timeout : float
        Total timeout for a single HTTP request in seconds.
    """

    write_api_key: str = ""
    read_api_key: str = ""
    channel_id: int = 0
    base_url: str = BASE_URL
    fields: FieldMapping = dataclasses.field(default_factory=FieldMapping)
    update_interval_seconds: float = 15
    trip_duration_minutes: float = 10
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.update_interval_seconds <= 0:
            raise CarSimConfigError(f"update_interval_seconds must be > 0, got {self.update_interval_seconds}")
        if self.trip_duration_minutes <= 0:
            raise CarSimConfigError(f"trip_duration_minutes must be > 0, got {self.trip_duration_minutes}")
        if self.request_timeout <= 0:
            raise CarSimConfigError(f"request_timeout must be > 0, got {self.request_timeout}")

    def require_write_key(self) -> str:
        """Return the write key or raise :class:`CarSimConfigError`."""
        key = self.write_api_key.strip()
        if not key:
            raise CarSimConfigError("write_api_key is missing")
        return key

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> CarSimConfig:
        """Load configuration from an ``appsettings.json`` style file.

        The file holds a ``ThingSpeak`` section with PascalCase keys
        (``WriteApiKey``, ``ChannelId``, ``FieldSpeed``, ...). Missing
        keys keep their defaults. Explicit keyword arguments override
        file values.

        Raises
        ------
        CarSimConfigError
            If the file does not exist or is not valid JSON.
        """
        settings_path = Path(path)
        if not settings_path.is_file():
            raise CarSimConfigError(f"Settings file not found: {settings_path}")
        try:
            document = json.loads(settings_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CarSimConfigError(f"Settings file {settings_path} is not valid JSON: {exc}") from exc

        section = document.get("ThingSpeak") if isinstance(document, dict) else None
        if not isinstance(section, dict):
            section = {}

        field_kwargs: dict[str, str] = {}
        _FILE_FIELD_MAP = {
            "FieldSpeed": "speed",
            "FieldRpm": "rpm",
            "FieldFuel": "fuel",
            "FieldTemp": "temp",
        }
        for file_key, field_name in _FILE_FIELD_MAP.items():
            val = section.get(file_key)
            if val:
                field_kwargs[field_name] = str(val)

        _FILE_CONFIG_MAP = {
            "WriteApiKey": ("write_api_key", str),
            "ReadApiKey": ("read_api_key", str),
            "ChannelId": ("channel_id", int),
            "BaseUrl": ("base_url", str),
            "UpdateIntervalSeconds": ("update_interval_seconds", float),
            "TripDurationMinutes": ("trip_duration_minutes", float),
            "RequestTimeoutSeconds": ("request_timeout", float),
        }
        field_overrides = overrides.pop("fields", None)
        if isinstance(field_overrides, dict):
            field_kwargs.update(field_overrides)
        elif isinstance(field_overrides, FieldMapping):
            field_kwargs = dataclasses.asdict(field_overrides)

        config_kwargs: dict[str, Any] = {"fields": FieldMapping(**field_kwargs)}
        for file_key, (field_name, convert) in _FILE_CONFIG_MAP.items():
            val = section.get(file_key)
            if val is None:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except (TypeError, ValueError) as exc:
                raise CarSimConfigError(f"Invalid value for {file_key}: {val!r}") from exc

        config_kwargs.update(overrides)
        return cls(**config_kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> CarSimConfig:
        """Create configuration from environment variables.

        Reads ``CARSIM_WRITE_API_KEY``, ``CARSIM_READ_API_KEY``,
        ``CARSIM_CHANNEL_ID`` and the other ``CARSIM_*`` variables.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        field_kwargs: dict[str, str] = {}
        _ENV_FIELD_MAP = {
            "CARSIM_FIELD_SPEED": "speed",
            "CARSIM_FIELD_RPM": "rpm",
            "CARSIM_FIELD_FUEL": "fuel",
            "CARSIM_FIELD_TEMP": "temp",
        }
        for env_key, field_name in _ENV_FIELD_MAP.items():
            val = env.get(env_key)
            if val:
                field_kwargs[field_name] = val

        field_overrides = overrides.pop("fields", None)
        if isinstance(field_overrides, dict):
            field_kwargs.update(field_overrides)
        elif isinstance(field_overrides, FieldMapping):
            field_kwargs = dataclasses.asdict(field_overrides)

        _ENV_CONFIG_MAP = {
            "CARSIM_WRITE_API_KEY": "write_api_key",
            "CARSIM_READ_API_KEY": "read_api_key",
            "CARSIM_BASE_URL": "base_url",
        }
        config_kwargs: dict[str, Any] = {"fields": FieldMapping(**field_kwargs)}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric settings, handled separately
        _ENV_NUMERIC_MAP = {
            "CARSIM_CHANNEL_ID": ("channel_id", int),
            "CARSIM_UPDATE_INTERVAL_SECONDS": ("update_interval_seconds", float),
            "CARSIM_TRIP_DURATION_MINUTES": ("trip_duration_minutes", float),
            "CARSIM_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        for env_key, (field_name, convert) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise CarSimConfigError(f"Invalid value for {env_key}: {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
