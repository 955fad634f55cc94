"""Vital-sign alert policy.

Pure functions only; the store decides when to call them.
"""

from __future__ import annotations

from pyambulance._constants import HEART_RATE_MIN, SPO2_MIN, TEMPERATURE_MIN
from pyambulance.models.telemetry import Vitals

# Field name -> exclusive lower bound.
THRESHOLDS: dict[str, float] = {
    "spo2": SPO2_MIN,
    "heart_rate": HEART_RATE_MIN,
    "temperature": TEMPERATURE_MIN,
}


def breached_fields(vitals: Vitals) -> list[str]:
    """Names of the known vitals that are below their threshold."""
    breached: list[str] = []
    for field_name, minimum in THRESHOLDS.items():
        value = getattr(vitals, field_name)
        if value is not None and value < minimum:
            breached.append(field_name)
    return breached


def evaluate_alert(vitals: Vitals) -> bool:
    """Return ``True`` when any known vital is below its threshold.

    Unknown fields never trigger. There is no hysteresis: a reading
    back at or above the threshold clears the alert immediately.
    """
    return bool(breached_fields(vitals))
