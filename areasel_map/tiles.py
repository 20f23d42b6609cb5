"""
Map and tile layer configuration.

Defaults reproduce the selector's stock view: OpenStreetMap tiles centered
on Moscow at zoom 10, with shift-drag box zoom off so it does not compete
with rectangle drawing.
"""

from dataclasses import dataclass
from typing import Tuple

from areasel_draw.geometry import Point

OSM_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

DEFAULT_CENTER = (55.751244, 37.618423)  # Moscow
DEFAULT_ZOOM = 10


@dataclass(frozen=True)
class TileConfig:
    """Base tile layer."""

    url: str = OSM_URL
    attribution: str = OSM_ATTRIBUTION
    name: str = "OpenStreetMap"
    max_zoom: int = 19

    def __post_init__(self):
        if not self.url:
            raise ValueError("tile url cannot be empty")
        for placeholder in ("{z}", "{x}", "{y}"):
            if placeholder not in self.url:
                raise ValueError(
                    f"tile url must contain {placeholder}, got {self.url}"
                )
        if not 0 <= self.max_zoom <= 24:
            raise ValueError(f"max_zoom must be in [0, 24], got {self.max_zoom}")


@dataclass(frozen=True)
class MapConfig:
    """Initial viewport and interaction flags."""

    center: Tuple[float, float] = DEFAULT_CENTER
    zoom: int = DEFAULT_ZOOM
    box_zoom: bool = False
    scroll_wheel_zoom: bool = True
    height: str = "600px"

    def __post_init__(self):
        if len(self.center) != 2:
            raise ValueError(f"center must be (lat, lng), got {self.center}")
        # Point validates latitude/longitude ranges
        Point(lat=float(self.center[0]), lng=float(self.center[1]))
        if not 0 <= self.zoom <= 24:
            raise ValueError(f"zoom must be in [0, 24], got {self.zoom}")
