"""Per-tick telemetry reading."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from carsim._constants import READING_PRECISION
from carsim.config import FieldMapping


class Reading(BaseModel):
    """The four rounded values produced by one simulation tick.

    Parameters
    ----------
    speed : float
        Vehicle speed in km/h.
    rpm : float
        Engine speed.
    fuel : float
        Fuel level in percent.
    temp : float
        Engine temperature in °C.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    speed: float
    rpm: float
    fuel: float
    temp: float

    @classmethod
    def rounded(cls, *, speed: float, rpm: float, fuel: float, temp: float) -> Reading:
        """Build a reading with every value rounded for transmission."""
        return cls(
            speed=round(speed, READING_PRECISION),
            rpm=round(rpm, READING_PRECISION),
            fuel=round(fuel, READING_PRECISION),
            temp=round(temp, READING_PRECISION),
        )

    def to_fields(self, fields: FieldMapping) -> dict[str, str]:
        """Map values onto channel field identifiers as query strings."""
        return {field_id: str(getattr(self, name)) for name, field_id in fields.as_dict().items()}
