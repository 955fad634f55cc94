"""pyambulance - Async telemetry core for a live ambulance vitals and location dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyambulance")
except PackageNotFoundError:
    __version__ = "0+local"
from pyambulance.channel import ChannelState, ChannelStats, TelemetryChannel
from pyambulance.config import DashboardConfig
from pyambulance.dashboard import AmbulanceDashboard
from pyambulance.dispatch import FacilityDispatcher
from pyambulance.exceptions import (
    AmbulanceError,
    ChannelError,
    ChannelUnavailableError,
    ConfigError,
    FacilitySearchError,
    FrameDecodeError,
    InvalidSelectionError,
)
from pyambulance.models import (
    DispatchOutcome,
    DispatchResult,
    FacilityCandidate,
    FacilitySelection,
    HospitalSelectCommand,
    MapStyle,
    Position,
    TelemetryFrame,
    TileLayer,
    ViewModel,
    Vitals,
)
from pyambulance.search import NominatimFacilitySearch
from pyambulance.state.store import ViewModelStore
from pyambulance.state.thresholds import evaluate_alert
from pyambulance.state.tracker import PositionTracker

__all__ = [
    "__version__",
    "AmbulanceDashboard",
    "AmbulanceError",
    "ChannelError",
    "ChannelState",
    "ChannelStats",
    "ChannelUnavailableError",
    "ConfigError",
    "DashboardConfig",
    "DispatchOutcome",
    "DispatchResult",
    "FacilityCandidate",
    "FacilityDispatcher",
    "FacilitySearchError",
    "FacilitySelection",
    "FrameDecodeError",
    "HospitalSelectCommand",
    "InvalidSelectionError",
    "MapStyle",
    "NominatimFacilitySearch",
    "Position",
    "PositionTracker",
    "TelemetryChannel",
    "TelemetryFrame",
    "TileLayer",
    "ViewModel",
    "ViewModelStore",
    "Vitals",
    "evaluate_alert",
]
