from __future__ import annotations

import pytest

from pyambulance.models.telemetry import Vitals
from pyambulance.state.thresholds import breached_fields, evaluate_alert


def test_no_vitals_known_is_not_an_emergency() -> None:
    assert evaluate_alert(Vitals()) is False


def test_healthy_vitals_do_not_alert() -> None:
    assert evaluate_alert(Vitals(heart_rate=95, spo2=98, temperature=36.8)) is False


@pytest.mark.parametrize(
    "vitals",
    [
        Vitals(spo2=90),
        Vitals(heart_rate=80),
        Vitals(temperature=20),
        Vitals(heart_rate=80, spo2=90, temperature=20),
    ],
)
def test_exactly_at_threshold_does_not_alert(vitals: Vitals) -> None:
    assert evaluate_alert(vitals) is False


@pytest.mark.parametrize(
    ("vitals", "field"),
    [
        (Vitals(spo2=89.9, heart_rate=100, temperature=37), "spo2"),
        (Vitals(spo2=97, heart_rate=79, temperature=37), "heart_rate"),
        (Vitals(spo2=97, heart_rate=100, temperature=19.5), "temperature"),
    ],
)
def test_any_single_breach_alerts(vitals: Vitals, field: str) -> None:
    assert evaluate_alert(vitals) is True
    assert breached_fields(vitals) == [field]


def test_unknown_fields_never_trigger_on_their_own() -> None:
    # Only heart rate is known and healthy; missing SpO2/temperature are not zero.
    assert evaluate_alert(Vitals(heart_rate=120)) is False


def test_zero_reading_is_a_present_value_and_alerts() -> None:
    assert evaluate_alert(Vitals(heart_rate=0)) is True


def test_multiple_breaches_reported_in_policy_order() -> None:
    assert breached_fields(Vitals(heart_rate=40, spo2=70, temperature=10)) == ["spo2", "heart_rate", "temperature"]
