"""Facility selection and search-result models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pyambulance.exceptions import InvalidSelectionError
from pyambulance.ingestion.normalize import safe_float, safe_str
from pyambulance.models.position import Position


class FacilitySelection(BaseModel):
    """An operator-chosen facility to send to the ambulance.

    ``name`` is free text from the search provider or the operator and is
    passed through unchanged apart from whitespace stripping. Escaping it
    for markup is the presentation layer's job.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )

    name: str = Field(min_length=1)
    lat: float
    lng: float

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _require_numbers(cls, value: Any) -> Any:
        # Strings and booleans are not coordinates.
        if isinstance(value, (bool, str)):
            raise ValueError("coordinate must be a number")
        return value

    @classmethod
    def parse(cls, value: FacilitySelection | Mapping[str, Any]) -> FacilitySelection:
        """Validate *value*, raising :class:`InvalidSelectionError` on failure.

        Already-built instances are re-validated too, since
        ``model_construct`` skips validation.
        """
        data = value.model_dump() if isinstance(value, FacilitySelection) else value
        if not isinstance(data, Mapping):
            raise InvalidSelectionError(f"selection must be a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidSelectionError(f"invalid facility selection: {exc.errors(include_url=False)}") from exc

    @property
    def position(self) -> Position:
        return Position(latitude=self.lat, longitude=self.lng)


class FacilityCandidate(BaseModel):
    """One facility returned by a search provider.

    Parameters
    ----------
    name : str
        Display name (Nominatim ``display_name``).
    position : Position
        Facility location.
    osm_id : int or None
        OpenStreetMap object id, when known.
    category : str or None
        Provider category (e.g. ``amenity``).
    kind : str or None
        Provider type within the category (e.g. ``hospital``).
    raw : dict
        Original provider entry.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("display_name", "displayName", "name"))
    position: Position
    osm_id: int | None = Field(default=None, validation_alias=AliasChoices("osm_id", "osmId"))
    category: str | None = Field(default=None, validation_alias=AliasChoices("category", "class"))
    kind: str | None = Field(default=None, validation_alias=AliasChoices("kind", "type"))
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _build_position(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        if "position" not in merged:
            position = Position.from_pair(merged.get("lat"), merged.get("lon", merged.get("lng")))
            if position is not None:
                merged["position"] = position
        merged["raw"] = values
        return merged

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("osm_id", mode="before")
    @classmethod
    def _coerce_osm_id(cls, value: Any) -> int | None:
        parsed = safe_float(value)
        return int(parsed) if parsed is not None else None

    def to_selection(self) -> FacilitySelection:
        """Turn this candidate into a dispatchable selection."""
        return FacilitySelection(name=self.name, lat=self.position.latitude, lng=self.position.longitude)
