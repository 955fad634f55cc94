"""Geographic position value type."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pyambulance.ingestion.normalize import safe_float


class Position(BaseModel):
    """A complete, finite latitude/longitude pair."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    latitude: float
    longitude: float

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _reject_bools(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("coordinate must be numeric")
        return value

    @classmethod
    def from_pair(cls, lat: Any, lng: Any) -> Position | None:
        """Build a position, or return ``None`` when either coordinate is unusable.

        A half pair is a sensor glitch rather than an error, so this
        never raises.
        """
        latitude = safe_float(lat)
        longitude = safe_float(lng)
        if latitude is None or longitude is None:
            return None
        return cls(latitude=latitude, longitude=longitude)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
