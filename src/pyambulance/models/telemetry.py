"""Inbound telemetry frame and vitals models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pyambulance.ingestion.normalize import safe_float
from pyambulance.models._base import TelemetryBaseModel
from pyambulance.models.position import Position


class TelemetryFrame(TelemetryBaseModel):
    """One partial update published by the ambulance unit.

    Every field is independently optional. ``None`` means the frame
    carries no update for that field, never "zero".

    Parameters
    ----------
    heart_rate : float or None
        Heart rate in beats per minute (wire key ``heartRate``).
    spo2 : float or None
        Blood-oxygen saturation percentage.
    temperature : float or None
        Body temperature in °C.
    lat : float or None
        Latitude in degrees.
    lng : float or None
        Longitude in degrees.
    raw : dict
        Original decoded payload.
    """

    heart_rate: float | None = None
    spo2: float | None = None
    temperature: float | None = None
    lat: float | None = None
    lng: float | None = None

    @field_validator("heart_rate", "spo2", "temperature", "lat", "lng", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def has_vitals(self) -> bool:
        """Whether the frame updates at least one vital sign."""
        return self.heart_rate is not None or self.spo2 is not None or self.temperature is not None

    @property
    def position(self) -> Position | None:
        """The frame's fix, or ``None`` unless both coordinates are present."""
        return Position.from_pair(self.lat, self.lng)

    def vitals_patch(self) -> dict[str, float]:
        """Vitals fields carried by this frame, keyed by :class:`Vitals` field name."""
        return self.model_dump(include={"heart_rate", "spo2", "temperature"}, exclude_none=True)


class Vitals(BaseModel):
    """Last known vital signs. ``None`` means unknown."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    heart_rate: float | None = None
    spo2: float | None = None
    temperature: float | None = None

    def merged(self, patch: dict[str, float]) -> Vitals:
        """Return a copy with the keys in *patch* overwritten."""
        if not patch:
            return self
        return self.model_copy(update=patch)
