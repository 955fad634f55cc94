"""Ingestion layer.

This package turns raw channel payloads into validated
:class:`pyambulance.models.TelemetryFrame` objects.
"""

__all__: list[str] = []
