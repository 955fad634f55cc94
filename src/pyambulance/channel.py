"""Duplex WebSocket channel to the ambulance unit."""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import aiohttp

from pyambulance._redact import preview_payload
from pyambulance.exceptions import ChannelError, ChannelUnavailableError, FrameDecodeError
from pyambulance.ingestion.frames import decode_frame
from pyambulance.models.commands import HospitalSelectCommand
from pyambulance.models.telemetry import TelemetryFrame

_logger = logging.getLogger(__name__)

_CLOSING_TYPES = frozenset({aiohttp.WSMsgType.CLOSE, aiohttp.WSMsgType.CLOSING, aiohttp.WSMsgType.CLOSED})


class ChannelState(enum.StrEnum):
    """Connection lifecycle. ``CLOSED`` is terminal."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(slots=True)
class ChannelStats:
    """Frame counters for observability."""

    frames_received: int = 0
    frames_applied: int = 0
    frames_dropped: int = 0
    frames_sent: int = 0


class TelemetryChannel:
    """One persistent WebSocket connection to a tracked unit.

    Inbound text frames are decoded and handed to *on_frame* one at a time
    from a single reader task. Outbound commands share the same socket;
    physical writes are serialized but never wait for inbound processing.

    Usage::

        channel = TelemetryChannel(url, http_session, on_frame=store.apply_frame)
        if await channel.connect():
            await channel.wait_closed()
    """

    def __init__(
        self,
        url: str,
        http_session: aiohttp.ClientSession,
        *,
        on_frame: Callable[[TelemetryFrame], None],
        heartbeat: float | None = None,
        connect_timeout: float = 15.0,
        on_decode_error: Callable[[FrameDecodeError], None] | None = None,
        on_state_change: Callable[[ChannelState], None] | None = None,
    ) -> None:
        self._url = url
        self._http = http_session
        self._on_frame = on_frame
        self._heartbeat = heartbeat if heartbeat else None
        self._connect_timeout = connect_timeout
        self._on_decode_error = on_decode_error
        self._on_state_change = on_state_change
        self._state = ChannelState.CONNECTING
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._reader: asyncio.Task[None] | None = None
        self._send_lock = asyncio.Lock()
        self._connect_attempted = False
        self._close_requested = False
        self._stats = ChannelStats()

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == ChannelState.OPEN

    @property
    def stats(self) -> ChannelStats:
        return self._stats

    @property
    def url(self) -> str:
        return self._url

    def _set_state(self, state: ChannelState) -> None:
        if self._state == state:
            return
        # Nothing leaves CLOSED.
        if self._state == ChannelState.CLOSED:
            return
        _logger.debug("Telemetry channel %s -> %s", self._state, state)
        self._state = state
        if self._on_state_change is not None:
            try:
                self._on_state_change(state)
            except Exception:
                _logger.debug("on_state_change callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> bool:
        """Open the WebSocket and start reading.

        Returns ``True`` once the channel is open. A failed handshake
        leaves the channel ``CLOSED`` and returns ``False``; it does not
        raise. A channel can only be connected once.
        """
        if self._connect_attempted:
            raise ChannelError("Telemetry channel already connected once; create a new channel to reconnect")
        self._connect_attempted = True
        if self._close_requested:
            return False

        _logger.debug("Connecting telemetry channel url=%s", self._url)
        try:
            ws = await asyncio.wait_for(
                self._http.ws_connect(self._url, heartbeat=self._heartbeat),
                self._connect_timeout,
            )
        except (aiohttp.ClientError, OSError, TimeoutError) as exc:
            _logger.warning("Telemetry channel connect to %s failed: %s", self._url, exc)
            self._set_state(ChannelState.CLOSED)
            return False

        if self._close_requested:
            with contextlib.suppress(Exception):
                await ws.close()
            return False

        self._ws = ws
        self._set_state(ChannelState.OPEN)
        self._reader = asyncio.create_task(self._read_loop(ws), name="pyambulance-telemetry-reader")
        _logger.info("Telemetry channel open url=%s", self._url)
        return True

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        self._close_requested = True
        ws = self._ws
        self._set_state(ChannelState.CLOSED)
        if ws is not None and not ws.closed:
            try:
                await ws.close()
            except Exception:
                _logger.debug("Telemetry channel close failed", exc_info=True)

        reader = self._reader
        if reader is not None and not reader.done():
            try:
                await asyncio.wait_for(asyncio.shield(reader), 5.0)
            except TimeoutError:
                reader.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await reader

    async def wait_closed(self) -> None:
        """Wait until the connection ends (remote close, error or :meth:`close`)."""
        reader = self._reader
        if reader is not None:
            # Shielded so a cancelled waiter does not tear down the reader.
            await asyncio.shield(reader)

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    async def _read_loop(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        try:
            while True:
                msg = await ws.receive()
                if msg.type in (aiohttp.WSMsgType.TEXT, aiohttp.WSMsgType.BINARY):
                    self._handle_payload(msg.data)
                    continue
                if msg.type == aiohttp.WSMsgType.ERROR:
                    _logger.warning("Telemetry channel error: %s", ws.exception())
                    break
                if msg.type in _CLOSING_TYPES:
                    _logger.info("Telemetry channel closed by peer code=%s", ws.close_code)
                    break
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.warning("Telemetry channel reader failed", exc_info=True)
        finally:
            self._set_state(ChannelState.CLOSED)
            if not self._close_requested and not ws.closed:
                with contextlib.suppress(Exception):
                    await ws.close()

    def _handle_payload(self, payload: str | bytes) -> None:
        self._stats.frames_received += 1
        try:
            frame = decode_frame(payload)
        except FrameDecodeError as exc:
            self._stats.frames_dropped += 1
            _logger.warning("Dropping telemetry frame: %s payload=%r", exc, preview_payload(payload))
            if self._on_decode_error is not None:
                try:
                    self._on_decode_error(exc)
                except Exception:
                    _logger.debug("on_decode_error callback failed", exc_info=True)
            return

        _logger.debug("Telemetry frame %s", frame.model_dump(exclude={"raw"}, exclude_none=True))
        try:
            self._on_frame(frame)
        except Exception:
            self._stats.frames_dropped += 1
            _logger.warning("Telemetry frame handler failed", exc_info=True)
            return
        self._stats.frames_applied += 1

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def send_command(self, command: HospitalSelectCommand) -> None:
        """Write one command frame.

        Raises :class:`ChannelUnavailableError` unless the channel is open.
        A write that fails on the transport closes the channel.
        """
        async with self._send_lock:
            ws = self._ws
            if self._state != ChannelState.OPEN or ws is None or ws.closed:
                raise ChannelUnavailableError(
                    f"Telemetry channel is {self._state}; cannot send {command.type}",
                    state=str(self._state),
                )
            wire = command.to_wire()
            try:
                await ws.send_str(wire)
            except (aiohttp.ClientError, ConnectionError) as exc:
                self._set_state(ChannelState.CLOSED)
                raise ChannelUnavailableError(
                    f"Telemetry channel write failed: {exc}",
                    state=str(self._state),
                ) from exc
            self._stats.frames_sent += 1
            _logger.debug("Sent %s frame (%d bytes)", command.type, len(wire))
