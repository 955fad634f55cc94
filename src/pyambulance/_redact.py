"""Helpers for safe debug logging.

Rejected channel payloads can be arbitrarily large and search requests
carry the operator's contact e-mail. Both go through this module before
they reach the logs.
"""

from __future__ import annotations

from collections.abc import Mapping

_REDACTED_PARAMS: frozenset[str] = frozenset({"email"})


def preview_payload(payload: str | bytes, *, limit: int = 120) -> str:
    """Return a short printable form of a raw channel payload."""
    if isinstance(payload, (bytes, bytearray)):
        text = bytes(payload).decode("utf-8", errors="replace")
    else:
        text = payload
    if len(text) > limit:
        return f"{text[:limit]}…<+{len(text) - limit} chars>"
    return text


def redact_params(params: Mapping[str, str]) -> dict[str, str]:
    """Copy of search query parameters with contact details masked."""
    return {key: "<redacted>" if key.lower() in _REDACTED_PARAMS else value for key, value in params.items()}
