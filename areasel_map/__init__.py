"""
Map Surfaces
============

Bounded Context: Map libraries behind the MapSurface contract.

Architecture:

    areasel_map/
    ├── bus.py       # EventBus (token-based publish/subscribe)
    ├── memory.py    # InMemoryMapSurface (headless, gesture simulation)
    ├── leaflet.py   # LeafletMapSurface (ipyleaflet Map + DrawControl)
    └── tiles.py     # MapConfig, TileConfig (OSM defaults)
"""

from areasel_map.bus import EventBus
from areasel_map.memory import (
    InMemoryMapSurface,
    InMemoryLayerGroup,
    InMemoryDrawTool,
    RectangleShape,
)
from areasel_map.tiles import MapConfig, TileConfig
from areasel_map.leaflet import LeafletMapSurface, LeafletDrawnShape

__all__ = [
    "EventBus",
    "InMemoryMapSurface",
    "InMemoryLayerGroup",
    "InMemoryDrawTool",
    "RectangleShape",
    "MapConfig",
    "TileConfig",
    "LeafletMapSurface",
    "LeafletDrawnShape",
]
