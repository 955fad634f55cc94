"""View-model snapshot handed to presentation consumers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pyambulance.models.position import Position
from pyambulance.models.telemetry import Vitals


class ViewModel(BaseModel):
    """Immutable snapshot of the reconciled dashboard state.

    Parameters
    ----------
    vitals : Vitals
        Last known heart rate, SpO2 and temperature.
    alert : bool
        Emergency flag computed from ``vitals`` at the most recent
        vitals-bearing merge.
    position : Position
        Latest fix, or the configured fallback before the first fix.
    has_fix : bool
        Whether at least one valid fix has been received.
    vitals_updated : bool
        Whether the most recent merge carried at least one vital sign.
    position_updated : bool
        Whether the most recent merge carried a valid fix.
    updated_at : datetime or None
        UTC time of the most recent merge.
    frames_applied : int
        Number of frames merged so far.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    vitals: Vitals = Field(default_factory=Vitals)
    alert: bool = False
    position: Position
    has_fix: bool = False
    vitals_updated: bool = False
    position_updated: bool = False
    updated_at: datetime | None = None
    frames_applied: int = 0
