from __future__ import annotations

import pytest

from pyambulance.models.position import Position
from pyambulance.state.store import ViewModelStore
from pyambulance.state.tracker import PositionTracker

from ._fakes import FALLBACK, FakeHttpSession, FakeWebSocket


@pytest.fixture
def tracker() -> PositionTracker:
    return PositionTracker(FALLBACK)


@pytest.fixture
def store(tracker: PositionTracker) -> ViewModelStore:
    return ViewModelStore(tracker)


@pytest.fixture
def fake_ws() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def fake_session(fake_ws: FakeWebSocket) -> FakeHttpSession:
    return FakeHttpSession(fake_ws)


@pytest.fixture
def fallback() -> Position:
    return FALLBACK
