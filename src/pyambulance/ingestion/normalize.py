"""Normalization helpers.

Centralizes defensive parsing and placeholder handling for sensor payloads.
"""

from __future__ import annotations

import math
from typing import Any

# Placeholder strings some sensor firmwares send for "not available".
_SENTINELS = frozenset({"", "--", "nan", "NaN", "null", "undefined"})


def safe_float(value: Any) -> float | None:
    """Convert *value* to a finite float, or ``None`` if it is not one.

    Booleans are rejected even though ``bool`` is an ``int`` subclass:
    a ``true`` heart rate is a firmware bug, not a reading of ``1``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value in _SENTINELS:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def is_meaningful(value: Any) -> bool:
    """Return False for placeholders that mean "no reading" (``None``, sentinels, empty containers)."""

    if value is None:
        return False
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return False
    if value == {}:
        return False
    return bool(value != [])

