"""Outbound command frames and dispatch results."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pyambulance._constants import HOSPITAL_SELECT_TYPE
from pyambulance.models.facility import FacilitySelection


class HospitalSelectCommand(BaseModel):
    """Wire frame telling the ambulance which hospital to drive to."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["hospitalSelect"] = HOSPITAL_SELECT_TYPE
    name: str
    lat: float
    lng: float

    @classmethod
    def from_selection(cls, selection: FacilitySelection) -> HospitalSelectCommand:
        return cls(name=selection.name, lat=selection.lat, lng=selection.lng)

    def to_wire(self) -> str:
        """Serialize to the compact JSON text sent on the channel."""
        return self.model_dump_json()


class DispatchOutcome(enum.StrEnum):
    """How a facility dispatch ended."""

    SENT = "sent"
    CHANNEL_UNAVAILABLE = "channel_unavailable"
    INVALID_SELECTION = "invalid_selection"


class DispatchResult(BaseModel):
    """Result of :meth:`pyambulance.dispatch.FacilityDispatcher.dispatch`.

    ``SENT`` only means the frame was written to the socket; the unit
    never acknowledges it.
    """

    model_config = ConfigDict(frozen=True)

    outcome: DispatchOutcome
    message: str | None = None
    command: HospitalSelectCommand | None = Field(default=None, description="Frame written, when sent")

    @property
    def success(self) -> bool:
        return self.outcome == DispatchOutcome.SENT
