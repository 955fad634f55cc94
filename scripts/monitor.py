#!/usr/bin/env python3
"""Live ambulance telemetry monitor.

Connects to the configured telemetry channel, logs every merged snapshot,
and optionally searches for nearby hospitals or dispatches one to the unit.

Configuration is read from ``AMBULANCE_*`` environment variables
(see :class:`pyambulance.config.DashboardConfig`); ``--url`` overrides the
channel URL.

Examples::

    python scripts/monitor.py
    python scripts/monitor.py --search
    python scripts/monitor.py --dispatch "District Hospital" 17.3311 76.8350
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyambulance import (  # noqa: E402
    AmbulanceDashboard,
    DashboardConfig,
    FacilitySearchError,
    ViewModel,
)
from pyambulance.state.thresholds import breached_fields  # noqa: E402

_logger = logging.getLogger("pyambulance.monitor")


def _fmt(value: float | None) -> str:
    return "--" if value is None else f"{value:g}"


def _print_snapshot(snapshot: ViewModel) -> None:
    vitals = snapshot.vitals
    line = (
        f"HR={_fmt(vitals.heart_rate)} SpO2={_fmt(vitals.spo2)} T={_fmt(vitals.temperature)} "
        f"pos=({snapshot.position.latitude:.5f}, {snapshot.position.longitude:.5f})"
        f"{' GPS' if snapshot.has_fix else ''}"
    )
    if snapshot.alert:
        line += f" !! EMERGENCY {','.join(breached_fields(vitals))}"
    print(line, flush=True)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Monitor live ambulance telemetry")
    parser.add_argument("--url", help="Telemetry WebSocket URL (overrides AMBULANCE_CHANNEL_URL)")
    parser.add_argument(
        "--search",
        action="store_true",
        help="Search for hospitals around the current position after the first frames arrive",
    )
    parser.add_argument(
        "--dispatch",
        nargs=3,
        metavar=("NAME", "LAT", "LNG"),
        help="Send a hospital selection to the unit once connected",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=0.0,
        help="Stop after this many seconds (0 = until the channel closes)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> int:
    overrides = {"channel_url": args.url} if args.url else {}
    config = DashboardConfig.from_env(**overrides)

    async with AmbulanceDashboard(config, view_sink=_print_snapshot) as dashboard:
        if not await dashboard.connect():
            print(f"Could not connect to {config.channel_url}", file=sys.stderr)
            return 1

        if args.dispatch:
            name, lat, lng = args.dispatch
            try:
                coords = float(lat), float(lng)
            except ValueError:
                print(f"dispatch: coordinates must be numbers, got {lat!r} {lng!r}", file=sys.stderr)
                return 2
            result = await dashboard.dispatch_facility(name, *coords)
            print(f"dispatch: {result.outcome}{f' ({result.message})' if result.message else ''}")

        if args.search:
            await asyncio.sleep(2.0)
            try:
                candidates = await dashboard.search_facilities()
            except FacilitySearchError as exc:
                print(f"search failed: {exc}", file=sys.stderr)
            else:
                if not candidates:
                    print("No hospitals found nearby.")
                for candidate in candidates:
                    pos = candidate.position
                    print(f"- {candidate.name} ({pos.latitude:.5f}, {pos.longitude:.5f})")

        if args.duration > 0:
            try:
                await asyncio.wait_for(dashboard.wait_closed(), args.duration)
            except TimeoutError:
                pass
        else:
            await dashboard.wait_closed()

        stats = dashboard.stats
        _logger.info(
            "received=%d applied=%d dropped=%d sent=%d",
            stats.frames_received,
            stats.frames_applied,
            stats.frames_dropped,
            stats.frames_sent,
        )
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
