"""In-memory view-model store.

This is the only component allowed to merge decoded telemetry frames.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime

from pyambulance.models.position import Position
from pyambulance.models.telemetry import TelemetryFrame, Vitals
from pyambulance.models.view import ViewModel
from pyambulance.state.thresholds import breached_fields, evaluate_alert
from pyambulance.state.tracker import PositionTracker

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ViewModelStore:
    """Last-known vitals, alert flag and position for one unit.

    Frames are merged field by field: a field absent from a frame leaves
    the stored value untouched. The alert flag is recomputed from the
    merged vitals after every vitals-bearing frame and is never set
    directly.

    ``apply_frame`` and ``current`` share a lock, so a snapshot never pairs
    vitals from one frame with an alert computed from another.
    """

    def __init__(
        self,
        tracker: PositionTracker,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tracker = tracker
        self._clock = clock
        self._lock = threading.RLock()
        self._vitals = Vitals()
        self._alert = False
        self._vitals_updated = False
        self._position_updated = False
        self._updated_at: datetime | None = None
        self._frames_applied = 0
        self._subscribers: list[Callable[[ViewModel], None]] = []

    @property
    def tracker(self) -> PositionTracker:
        return self._tracker

    def apply_frame(self, frame: TelemetryFrame) -> None:
        """Merge a decoded frame into the view model."""
        fix: Position | None = None
        with self._lock:
            patch = frame.vitals_patch()
            self._vitals_updated = bool(patch)
            if patch:
                self._vitals = self._vitals.merged(patch)
                alert = evaluate_alert(self._vitals)
                if alert != self._alert:
                    _logger.info(
                        "Alert %s breached=%s",
                        "raised" if alert else "cleared",
                        breached_fields(self._vitals),
                    )
                self._alert = alert

            fix = frame.position
            self._position_updated = fix is not None
            if fix is not None:
                self._tracker.record(fix, notify=False)
            elif frame.lat is not None or frame.lng is not None:
                _logger.debug("Ignoring incomplete fix lat=%r lng=%r", frame.lat, frame.lng)

            self._updated_at = self._clock()
            self._frames_applied += 1
            snapshot = self._snapshot_locked()
            subscribers = list(self._subscribers)

        if fix is not None:
            self._tracker.notify_listeners(fix)
        for subscriber in subscribers:
            try:
                subscriber(snapshot)
            except Exception:
                _logger.debug("View-model subscriber failed", exc_info=True)

    def current(self) -> ViewModel:
        """Return an immutable snapshot of the current view model."""
        with self._lock:
            return self._snapshot_locked()

    def subscribe(self, callback: Callable[[ViewModel], None]) -> Callable[[], None]:
        """Push a snapshot to *callback* after every merge. Returns an unsubscriber."""
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def _snapshot_locked(self) -> ViewModel:
        return ViewModel(
            vitals=self._vitals,
            alert=self._alert,
            position=self._tracker.latest(),
            has_fix=self._tracker.has_fix,
            vitals_updated=self._vitals_updated,
            position_updated=self._position_updated,
            updated_at=self._updated_at,
            frames_applied=self._frames_applied,
        )
