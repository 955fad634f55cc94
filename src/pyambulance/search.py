"""Nearby facility lookup.

The dashboard only needs a list of candidates around the unit; the
reference provider queries OpenStreetMap Nominatim.
"""

from __future__ import annotations

import json
import logging
from typing import Protocol

import aiohttp
from pydantic import ValidationError

from pyambulance._redact import redact_params
from pyambulance.config import DashboardConfig
from pyambulance.exceptions import FacilitySearchError
from pyambulance.models.facility import FacilityCandidate
from pyambulance.models.position import Position

_logger = logging.getLogger(__name__)


class FacilitySearch(Protocol):
    """Structural interface for facility providers."""

    async def search(self, position: Position, radius_deg: float | None = None) -> list[FacilityCandidate]: ...


def build_viewbox(position: Position, radius_deg: float) -> str:
    """Nominatim ``viewbox`` (left,top,right,bottom) centred on *position*."""
    lat, lng = position.as_tuple()
    return f"{lng - radius_deg},{lat + radius_deg},{lng + radius_deg},{lat - radius_deg}"


class NominatimFacilitySearch:
    """Facility search backed by a Nominatim ``/search`` endpoint."""

    def __init__(self, config: DashboardConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _build_params(self, position: Position, radius_deg: float) -> dict[str, str]:
        params: dict[str, str] = {
            "format": "json",
            "q": self._config.search_query,
            "addressdetails": "1",
            "limit": str(self._config.search_limit),
            "bounded": "1",
            "viewbox": build_viewbox(position, radius_deg),
        }
        if self._config.search_email:
            params["email"] = self._config.search_email
        return params

    async def search(self, position: Position, radius_deg: float | None = None) -> list[FacilityCandidate]:
        """Return facilities inside a box of +/- *radius_deg* around *position*.

        Raises :class:`FacilitySearchError` on network, HTTP or JSON
        failures. Entries without a usable name or coordinates are
        skipped.
        """
        delta = self._config.search_radius_deg if radius_deg is None else radius_deg
        if not delta > 0:
            raise ValueError(f"radius_deg must be > 0, got {delta}")

        url = self._config.search_url
        params = self._build_params(position, delta)
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s params=%s", url, redact_params(params))

        try:
            async with self._http.get(url, params=params, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise FacilitySearchError(
                        f"HTTP {resp.status} from facility search: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except FacilitySearchError:
            raise
        except aiohttp.ClientError as exc:
            raise FacilitySearchError(f"Facility search request failed: {exc}", url=url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FacilitySearchError(f"Invalid JSON from facility search: {text[:200]}", url=url) from exc

        if not isinstance(body, list):
            raise FacilitySearchError("Facility search response is not a list", url=url)

        candidates: list[FacilityCandidate] = []
        for entry in body:
            if not isinstance(entry, dict):
                continue
            try:
                candidates.append(FacilityCandidate.model_validate(entry))
            except ValidationError:
                _logger.debug("Skipping unusable search result %r", entry.get("display_name"), exc_info=True)

        _logger.debug("Facility search returned %d candidate(s)", len(candidates))
        return candidates
