from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pyambulance.models.position import Position
from pyambulance.models.telemetry import TelemetryFrame
from pyambulance.models.view import ViewModel
from pyambulance.state.store import ViewModelStore
from pyambulance.state.tracker import PositionTracker

from ._fakes import FALLBACK


def _frame(**fields: object) -> TelemetryFrame:
    return TelemetryFrame.model_validate(fields)


def test_initial_snapshot_uses_fallback_and_unknown_vitals(store: ViewModelStore) -> None:
    snapshot = store.current()

    assert snapshot.vitals.heart_rate is None
    assert snapshot.vitals.spo2 is None
    assert snapshot.vitals.temperature is None
    assert snapshot.alert is False
    assert snapshot.position == FALLBACK
    assert snapshot.has_fix is False
    assert snapshot.updated_at is None
    assert snapshot.frames_applied == 0


def test_partial_vitals_merge_keeps_untouched_fields_and_recomputes_alert(store: ViewModelStore) -> None:
    store.apply_frame(_frame(spo2=95, temperature=25))
    assert store.current().alert is False

    store.apply_frame(_frame(heartRate=70))

    snapshot = store.current()
    assert snapshot.vitals.heart_rate == 70
    assert snapshot.vitals.spo2 == 95
    assert snapshot.vitals.temperature == 25
    assert snapshot.alert is True


def test_alert_flickers_without_hysteresis(store: ViewModelStore) -> None:
    store.apply_frame(_frame(spo2=85))
    assert store.current().alert is True

    store.apply_frame(_frame(spo2=95))
    assert store.current().alert is False


def test_alert_uses_merged_state_not_delta(store: ViewModelStore) -> None:
    store.apply_frame(_frame(heartRate=60))
    # The new frame is healthy on its own, but the stored heart rate still breaches.
    store.apply_frame(_frame(spo2=99))

    assert store.current().alert is True


def test_position_only_frame_does_not_touch_vitals_or_alert(store: ViewModelStore) -> None:
    store.apply_frame(_frame(spo2=80))
    store.apply_frame(_frame(lat=17.40, lng=76.90))

    snapshot = store.current()
    assert snapshot.alert is True
    assert snapshot.vitals.spo2 == 80
    assert snapshot.vitals_updated is False


def test_complete_position_pair_updates_fix(store: ViewModelStore) -> None:
    store.apply_frame(_frame(lat=17.40, lng=76.90))

    snapshot = store.current()
    assert snapshot.position == Position(latitude=17.40, longitude=76.90)
    assert snapshot.has_fix is True
    assert snapshot.position_updated is True


def test_half_position_pair_is_ignored(store: ViewModelStore) -> None:
    store.apply_frame(_frame(lat=17.40, lng=76.90))
    store.apply_frame(_frame(lat=17.41))

    snapshot = store.current()
    assert snapshot.position.as_tuple() == (17.40, 76.90)
    assert snapshot.position_updated is False
    assert snapshot.has_fix is True


def test_half_pair_before_first_fix_keeps_fallback(store: ViewModelStore) -> None:
    store.apply_frame(_frame(lng=76.95, heartRate=90))

    snapshot = store.current()
    assert snapshot.position == FALLBACK
    assert snapshot.has_fix is False
    assert snapshot.vitals.heart_rate == 90


def test_zero_coordinates_are_a_valid_fix(store: ViewModelStore) -> None:
    store.apply_frame(_frame(lat=0, lng=0))

    assert store.current().position.as_tuple() == (0.0, 0.0)
    assert store.current().has_fix is True


def test_empty_frame_changes_nothing_but_is_counted(store: ViewModelStore) -> None:
    store.apply_frame(_frame(heartRate=90))
    before = store.current()

    store.apply_frame(_frame())
    after = store.current()

    assert after.vitals == before.vitals
    assert after.alert == before.alert
    assert after.frames_applied == before.frames_applied + 1


def test_snapshots_are_immutable_and_detached(store: ViewModelStore) -> None:
    store.apply_frame(_frame(heartRate=90))
    snapshot = store.current()

    with pytest.raises(ValidationError):
        snapshot.alert = True  # type: ignore[misc]

    store.apply_frame(_frame(heartRate=50))
    assert snapshot.vitals.heart_rate == 90
    assert store.current().vitals.heart_rate == 50


def test_updated_at_comes_from_injected_clock(tracker: PositionTracker) -> None:
    moment = datetime(2026, 1, 1, tzinfo=UTC)
    store = ViewModelStore(tracker, clock=lambda: moment)

    store.apply_frame(_frame(spo2=97))

    assert store.current().updated_at == moment


def test_subscribers_receive_snapshot_and_failures_are_isolated(store: ViewModelStore) -> None:
    received: list[ViewModel] = []

    def broken(_snapshot: ViewModel) -> None:
        raise RuntimeError("widget crashed")

    store.subscribe(broken)
    unsubscribe = store.subscribe(received.append)

    store.apply_frame(_frame(spo2=85))
    assert len(received) == 1
    assert received[0].alert is True
    assert received[0].vitals_updated is True

    unsubscribe()
    store.apply_frame(_frame(spo2=99))
    assert len(received) == 1
    assert store.current().alert is False


def test_subscriber_may_read_store_without_deadlock(store: ViewModelStore) -> None:
    seen: list[bool] = []
    store.subscribe(lambda _snapshot: seen.append(store.current().alert))

    store.apply_frame(_frame(temperature=10))

    assert seen == [True]


def test_map_listeners_fire_only_on_valid_fix(store: ViewModelStore, tracker: PositionTracker) -> None:
    fixes: list[Position] = []
    tracker.add_listener(fixes.append)

    store.apply_frame(_frame(lat=17.40, lng=76.90))
    store.apply_frame(_frame(lat=17.41))
    store.apply_frame(_frame(heartRate=90))

    assert fixes == [Position(latitude=17.40, longitude=76.90)]
