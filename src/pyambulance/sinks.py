"""Presentation collaborator interfaces.

The core never renders anything. Widgets implement these callables and
hand them to :class:`pyambulance.dashboard.AmbulanceDashboard`.
"""

from __future__ import annotations

from typing import Protocol

from pyambulance.models.position import Position
from pyambulance.models.view import ViewModel


class ViewModelSink(Protocol):
    """Receives a fresh snapshot after every merged frame."""

    def __call__(self, snapshot: ViewModel) -> None: ...


class AlertSink(Protocol):
    """Shows or hides the emergency indicator after every vitals update."""

    def __call__(self, alert: bool) -> None: ...


class MapSink(Protocol):
    """Re-centres and re-marks the map on every valid fix."""

    def __call__(self, position: Position) -> None: ...
