"""High-level async facade wiring the channel, store and collaborators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from pyambulance.channel import ChannelState, ChannelStats, TelemetryChannel
from pyambulance.config import DashboardConfig
from pyambulance.dispatch import FacilityDispatcher
from pyambulance.exceptions import AmbulanceError, FrameDecodeError
from pyambulance.models.commands import DispatchResult
from pyambulance.models.facility import FacilityCandidate, FacilitySelection
from pyambulance.models.map import MapStyle, TileLayer, tile_layer_for
from pyambulance.models.position import Position
from pyambulance.models.view import ViewModel
from pyambulance.search import FacilitySearch, NominatimFacilitySearch
from pyambulance.sinks import AlertSink, MapSink, ViewModelSink
from pyambulance.state.store import ViewModelStore
from pyambulance.state.tracker import PositionTracker

_logger = logging.getLogger(__name__)


class AmbulanceDashboard:
    """Dashboard core for one tracked ambulance.

    Usage::

        async with AmbulanceDashboard(config, alert_sink=banner.set_visible) as dashboard:
            await dashboard.connect()
            snapshot = dashboard.snapshot()
            result = await dashboard.dispatch_facility("District Hospital", 17.33, 76.83)
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        view_sink: ViewModelSink | None = None,
        alert_sink: AlertSink | None = None,
        map_sink: MapSink | None = None,
        search: FacilitySearch | None = None,
        on_decode_error: Callable[[FrameDecodeError], None] | None = None,
    ) -> None:
        self._config = config or DashboardConfig()
        self._external_session = session is not None
        self._http_session = session
        self._view_sink = view_sink
        self._alert_sink = alert_sink
        self._search = search
        self._on_decode_error = on_decode_error

        fallback = Position(
            latitude=self._config.fallback_latitude,
            longitude=self._config.fallback_longitude,
        )
        self._tracker = PositionTracker(fallback)
        self._store = ViewModelStore(self._tracker)
        self._channel: TelemetryChannel | None = None
        self._dispatcher: FacilityDispatcher | None = None

        if view_sink is not None or alert_sink is not None:
            self._store.subscribe(self._push_to_sinks)
        if map_sink is not None:
            self._tracker.add_listener(map_sink)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AmbulanceDashboard:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._channel = TelemetryChannel(
            self._config.channel_url,
            self._http_session,
            on_frame=self._store.apply_frame,
            heartbeat=self._config.ws_heartbeat,
            connect_timeout=self._config.connect_timeout,
            on_decode_error=self._on_decode_error,
        )
        self._dispatcher = FacilityDispatcher(self._channel)
        if self._search is None:
            self._search = NominatimFacilitySearch(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_channel(self) -> TelemetryChannel:
        if self._channel is None:
            raise AmbulanceError("Dashboard not initialized. Use 'async with AmbulanceDashboard(...) as dashboard:'")
        return self._channel

    def _push_to_sinks(self, snapshot: ViewModel) -> None:
        if self._view_sink is not None:
            try:
                self._view_sink(snapshot)
            except Exception:
                _logger.debug("view_sink failed", exc_info=True)
        if self._alert_sink is not None and snapshot.vitals_updated:
            try:
                self._alert_sink(snapshot.alert)
            except Exception:
                _logger.debug("alert_sink failed", exc_info=True)

    # ------------------------------------------------------------------
    # Channel
    # ------------------------------------------------------------------

    async def connect(self) -> bool:
        """Open the telemetry channel. Returns ``False`` if the handshake failed."""
        return await self._require_channel().connect()

    async def wait_closed(self) -> None:
        """Block until the telemetry channel ends."""
        await self._require_channel().wait_closed()

    async def close(self) -> None:
        if self._channel is not None:
            await self._channel.close()

    @property
    def state(self) -> ChannelState:
        return self._require_channel().state

    @property
    def stats(self) -> ChannelStats:
        return self._require_channel().stats

    # ------------------------------------------------------------------
    # View model
    # ------------------------------------------------------------------

    @property
    def store(self) -> ViewModelStore:
        return self._store

    @property
    def tracker(self) -> PositionTracker:
        return self._tracker

    def snapshot(self) -> ViewModel:
        """Current view model."""
        return self._store.current()

    def subscribe(self, callback: Callable[[ViewModel], None]) -> Callable[[], None]:
        return self._store.subscribe(callback)

    def tile_layer(self, style: MapStyle | str | None = None) -> TileLayer:
        """Tile source for *style*, defaulting to ``config.map_style``."""
        return tile_layer_for(style if style is not None else self._config.map_style)

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------

    async def search_facilities(self, radius_deg: float | None = None) -> list[FacilityCandidate]:
        """Search for facilities around the unit's current position."""
        self._require_channel()
        assert self._search is not None  # noqa: S101
        position = self._store.current().position
        return await self._search.search(position, radius_deg)

    async def dispatch(self, selection: FacilitySelection | FacilityCandidate | Mapping[str, Any]) -> DispatchResult:
        """Send a facility to the unit. See :meth:`FacilityDispatcher.dispatch`."""
        self._require_channel()
        assert self._dispatcher is not None  # noqa: S101
        if isinstance(selection, FacilityCandidate):
            selection = selection.to_selection()
        return await self._dispatcher.dispatch(selection)

    async def dispatch_facility(self, name: str, lat: float, lng: float) -> DispatchResult:
        return await self.dispatch({"name": name, "lat": lat, "lng": lng})
