"""Dashboard configuration for pyambulance."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pyambulance._constants import (
    CHANNEL_URL,
    FALLBACK_LATITUDE,
    FALLBACK_LONGITUDE,
    SEARCH_LIMIT,
    SEARCH_QUERY,
    SEARCH_RADIUS_DEG,
    SEARCH_URL,
    USER_AGENT,
)
from pyambulance.exceptions import ConfigError
from pyambulance.models.map import MapStyle


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{env_key} must be a number, got {value!r}") from exc


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Dashboard configuration.

    Parameters
    ----------
    channel_url : str
        WebSocket URL of the telemetry relay the ambulance unit publishes to.
    fallback_latitude : float
        Latitude reported until the first GPS fix arrives.
    fallback_longitude : float
        Longitude reported until the first GPS fix arrives.
    ws_heartbeat : float
        WebSocket ping interval in seconds. ``0`` disables heartbeats.
        A missed pong closes the channel.
    connect_timeout : float
        Seconds allowed for the WebSocket handshake.
    search_url : str
        Nominatim-compatible search endpoint used for facility lookups.
    search_query : str
        Free-text query sent to the search endpoint.
    search_limit : int
        Maximum number of candidates returned by a search.
    search_radius_deg : float
        Half-width (degrees) of the bounding box searched around the unit.
    search_email : str or None
        Contact e-mail forwarded to Nominatim as required by its usage policy.
    user_agent : str
        ``User-Agent`` header sent with search requests.
    map_style : str
        Default map tile style (``roadmap``, ``satellite`` or ``hybrid``).
    """

    channel_url: str = CHANNEL_URL
    fallback_latitude: float = FALLBACK_LATITUDE
    fallback_longitude: float = FALLBACK_LONGITUDE
    ws_heartbeat: float = 30.0
    connect_timeout: float = 15.0
    search_url: str = SEARCH_URL
    search_query: str = SEARCH_QUERY
    search_limit: int = SEARCH_LIMIT
    search_radius_deg: float = SEARCH_RADIUS_DEG
    search_email: str | None = None
    user_agent: str = USER_AGENT
    map_style: str = MapStyle.ROADMAP.value

    def __post_init__(self) -> None:
        if not self.channel_url.startswith(("ws://", "wss://")):
            raise ConfigError(f"channel_url must be a ws:// or wss:// URL, got {self.channel_url!r}")
        for name in ("fallback_latitude", "fallback_longitude"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be finite")
        if self.ws_heartbeat < 0:
            raise ConfigError("ws_heartbeat must be >= 0")
        if self.connect_timeout <= 0:
            raise ConfigError("connect_timeout must be > 0")
        if self.search_limit < 1:
            raise ConfigError("search_limit must be >= 1")
        if not self.search_radius_deg > 0:
            raise ConfigError("search_radius_deg must be > 0")
        try:
            MapStyle(self.map_style)
        except ValueError as exc:
            allowed = ", ".join(style.value for style in MapStyle)
            raise ConfigError(f"map_style must be one of {allowed}, got {self.map_style!r}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from environment variables.

        Reads optional ``AMBULANCE_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        DashboardConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "AMBULANCE_CHANNEL_URL": "channel_url",
            "AMBULANCE_SEARCH_URL": "search_url",
            "AMBULANCE_SEARCH_QUERY": "search_query",
            "AMBULANCE_SEARCH_EMAIL": "search_email",
            "AMBULANCE_USER_AGENT": "user_agent",
            "AMBULANCE_MAP_STYLE": "map_style",
        }
        _ENV_FLOAT_MAP = {
            "AMBULANCE_FALLBACK_LAT": "fallback_latitude",
            "AMBULANCE_FALLBACK_LNG": "fallback_longitude",
            "AMBULANCE_WS_HEARTBEAT": "ws_heartbeat",
            "AMBULANCE_CONNECT_TIMEOUT": "connect_timeout",
            "AMBULANCE_SEARCH_RADIUS": "search_radius_deg",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val.strip()

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        limit_env = env.get("AMBULANCE_SEARCH_LIMIT")
        if limit_env is not None and "search_limit" not in overrides:
            config_kwargs["search_limit"] = _env_int("AMBULANCE_SEARCH_LIMIT", limit_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
