"""State/store layer.

This package is the single source of truth for how decoded telemetry frames
are merged into the dashboard's view model.
"""
