"""Custom exception hierarchy for pyambulance."""

from __future__ import annotations


class AmbulanceError(Exception):
    """Base exception for all pyambulance errors."""


class ConfigError(AmbulanceError):
    """Invalid or missing configuration."""


class FrameDecodeError(AmbulanceError):
    """Inbound payload could not be decoded as a telemetry frame.

    The channel catches this, reports it and drops the frame; it never
    reaches the view-model store.
    """

    def __init__(self, message: str, *, payload: str | bytes | None = None) -> None:
        self.payload = payload
        super().__init__(message)


class ChannelError(AmbulanceError):
    """Telemetry channel failure."""


class ChannelUnavailableError(ChannelError):
    """Outbound send attempted while the channel is not open."""

    def __init__(self, message: str, *, state: str = "") -> None:
        self.state = state
        super().__init__(message)


class InvalidSelectionError(AmbulanceError):
    """Facility selection is missing a name or has non-finite coordinates."""


class FacilitySearchError(AmbulanceError):
    """Facility lookup failed (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
