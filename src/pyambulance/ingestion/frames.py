"""Inbound frame decoding.

This module is the only place raw channel payloads are parsed. Anything it
returns is safe to hand to the view-model store.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from pyambulance.exceptions import FrameDecodeError
from pyambulance.models.telemetry import TelemetryFrame


def _load_json_object(payload: str | bytes) -> dict[str, Any]:
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FrameDecodeError("Frame is not valid UTF-8", payload=payload) from exc

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise FrameDecodeError(f"Frame is not JSON: {exc.msg}", payload=payload) from exc
    except (ValueError, RecursionError) as exc:
        # Oversized integer literals and pathological nesting.
        raise FrameDecodeError(f"Frame is not decodable JSON: {exc}", payload=payload) from exc

    if not isinstance(parsed, dict):
        raise FrameDecodeError(
            f"Frame decoded to {type(parsed).__name__}, expected an object",
            payload=payload,
        )
    return parsed


def decode_frame(payload: str | bytes) -> TelemetryFrame:
    """Decode one channel payload into a :class:`TelemetryFrame`.

    Field-level junk (``"--"``, ``null``, non-numeric strings) only makes
    that field absent. The frame as a whole is rejected with
    :class:`FrameDecodeError` when it is not a JSON object.
    """
    data = _load_json_object(payload)
    try:
        return TelemetryFrame.model_validate(data)
    except ValidationError as exc:
        raise FrameDecodeError(f"Frame failed validation: {exc.error_count()} error(s)", payload=payload) from exc
