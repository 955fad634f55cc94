"""GPS fix tracking and map-consumer notification."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pyambulance.models.position import Position

_logger = logging.getLogger(__name__)


class PositionTracker:
    """Latest position of the unit, with a fallback until the first fix."""

    def __init__(self, fallback: Position) -> None:
        self._fallback = fallback
        self._latest: Position | None = None
        self._lock = threading.Lock()
        self._listeners: list[Callable[[Position], None]] = []

    def latest(self) -> Position:
        """Current fix, or the fallback position before the first fix."""
        with self._lock:
            return self._latest if self._latest is not None else self._fallback

    @property
    def has_fix(self) -> bool:
        """Whether at least one valid fix has been received."""
        with self._lock:
            return self._latest is not None

    def update(self, lat: Any, lng: Any) -> bool:
        """Record a fix. Returns ``False`` and changes nothing for a partial pair."""
        position = Position.from_pair(lat, lng)
        if position is None:
            if lat is not None or lng is not None:
                _logger.debug("Ignoring incomplete fix lat=%r lng=%r", lat, lng)
            return False
        self.record(position)
        return True

    def record(self, position: Position, *, notify: bool = True) -> None:
        """Store an already-validated fix, notifying listeners unless told not to."""
        with self._lock:
            self._latest = position
        if notify:
            self.notify_listeners(position)

    def notify_listeners(self, position: Position) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(position)
            except Exception:
                _logger.debug("Position listener failed", exc_info=True)

    def add_listener(self, listener: Callable[[Position], None]) -> Callable[[], None]:
        """Call *listener* with every new fix. Returns a remover."""
        with self._lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _remove
