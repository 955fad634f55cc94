"""Test doubles for the telemetry channel transport."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp

from pyambulance.models.position import Position

FALLBACK = Position(latitude=17.3297, longitude=76.8343)


@dataclass
class FakeMessage:
    type: aiohttp.WSMsgType
    data: Any = None


class FakeWebSocket:
    """In-memory stand-in for ``aiohttp.ClientWebSocketResponse``."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self.close_code: int | None = None
        self.send_error: Exception | None = None
        self.send_delay: float = 0.0
        self.in_flight = 0
        self.max_in_flight = 0
        self._error: BaseException | None = None
        self._inbox: asyncio.Queue[FakeMessage] = asyncio.Queue()

    def push_text(self, text: str) -> None:
        self._inbox.put_nowait(FakeMessage(aiohttp.WSMsgType.TEXT, text))

    def push_binary(self, data: bytes) -> None:
        self._inbox.put_nowait(FakeMessage(aiohttp.WSMsgType.BINARY, data))

    def push_error(self, exc: BaseException) -> None:
        self._error = exc
        self._inbox.put_nowait(FakeMessage(aiohttp.WSMsgType.ERROR, exc))

    def remote_close(self, code: int = 1000) -> None:
        self.close_code = code
        self._inbox.put_nowait(FakeMessage(aiohttp.WSMsgType.CLOSE, code))

    def exception(self) -> BaseException | None:
        return self._error

    async def receive(self) -> FakeMessage:
        msg = await self._inbox.get()
        if msg.type in (aiohttp.WSMsgType.CLOSE, aiohttp.WSMsgType.CLOSED):
            self.closed = True
        return msg

    async def send_str(self, data: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        if self.closed:
            raise ConnectionResetError("Cannot write to closing transport")
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.send_delay:
                await asyncio.sleep(self.send_delay)
            self.sent.append(data)
        finally:
            self.in_flight -= 1

    async def close(self) -> bool:
        if self.closed:
            return False
        self.closed = True
        self.close_code = 1000
        self._inbox.put_nowait(FakeMessage(aiohttp.WSMsgType.CLOSED))
        return True


class FakeHttpSession:
    """Only implements what :class:`TelemetryChannel` needs."""

    def __init__(self, ws: FakeWebSocket | None = None, connect_error: BaseException | None = None) -> None:
        self.ws = ws or FakeWebSocket()
        self.connect_error = connect_error
        self.ws_connect_calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def ws_connect(self, url: str, **kwargs: Any) -> FakeWebSocket:
        self.ws_connect_calls.append((url, kwargs))
        if self.connect_error is not None:
            raise self.connect_error
        return self.ws

    async def close(self) -> None:
        self.closed = True


async def settle() -> None:
    """Let the channel reader task drain whatever was pushed."""
    for _ in range(5):
        await asyncio.sleep(0)
