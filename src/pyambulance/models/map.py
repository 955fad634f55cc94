"""Map tile styles offered to the map widget."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MapStyle(enum.StrEnum):
    """Tile style selector for the map collaborator."""

    ROADMAP = "roadmap"
    SATELLITE = "satellite"
    HYBRID = "hybrid"

    @classmethod
    def _missing_(cls, value: object) -> MapStyle | None:
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        # Older dashboards called the road map "osm".
        if lowered in {"osm", "road"}:
            return cls.ROADMAP
        for member in cls:
            if member.value == lowered:
                return member
        return None


@dataclass(frozen=True, slots=True)
class TileLayer:
    """Leaflet-style tile source description."""

    url_template: str
    attribution: str


_OSM = TileLayer(
    url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    attribution="&copy; OpenStreetMap contributors",
)

TILE_LAYERS: dict[MapStyle, TileLayer] = {
    MapStyle.ROADMAP: _OSM,
    MapStyle.SATELLITE: TileLayer(
        url_template="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attribution="Tiles © Esri",
    ),
    # No label overlay yet, so hybrid renders the road map.
    MapStyle.HYBRID: _OSM,
}


def tile_layer_for(style: MapStyle | str) -> TileLayer:
    """Return the tile source for *style*; unknown names raise ``ValueError``."""
    return TILE_LAYERS[MapStyle(style)]
