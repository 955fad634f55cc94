"""Data models for telemetry frames, view snapshots and commands."""

from pyambulance.models._base import TelemetryBaseModel
from pyambulance.models.commands import DispatchOutcome, DispatchResult, HospitalSelectCommand
from pyambulance.models.facility import FacilityCandidate, FacilitySelection
from pyambulance.models.map import TILE_LAYERS, MapStyle, TileLayer, tile_layer_for
from pyambulance.models.position import Position
from pyambulance.models.telemetry import TelemetryFrame, Vitals
from pyambulance.models.view import ViewModel

__all__ = [
    "DispatchOutcome",
    "DispatchResult",
    "FacilityCandidate",
    "FacilitySelection",
    "HospitalSelectCommand",
    "MapStyle",
    "Position",
    "TILE_LAYERS",
    "TelemetryBaseModel",
    "TelemetryFrame",
    "TileLayer",
    "ViewModel",
    "Vitals",
    "tile_layer_for",
]
