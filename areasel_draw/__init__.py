"""
Area Selector Draw Core
=======================

Bounded Context: Rectangle selection on an interactive map.

Architecture:

    areasel_draw/
    ├── geometry/          # Pure geographic values (immutable, stateless)
    │   ├── shapes.py      # Point, LatLngBounds, AreaCoordinates
    │   └── vertices.py    # numpy vertex -> bounds helpers
    │
    ├── logging/           # Structured JSON logs (LogEvent taxonomy)
    ├── surface.py         # MapSurface protocol, DrawOptions, SHAPE_CREATED
    ├── errors.py          # ToolInitializationFailure, ShapeExtractionFailure
    └── controller.py      # DrawController (attach / detach lifecycle)

Usage:

    from areasel_draw import DrawController
    from areasel_map import InMemoryMapSurface

    surface = InMemoryMapSurface()
    controller = DrawController(surface, on_area_selected=print)

    with controller.attach():
        surface.draw_rectangle(south=10.0, west=20.0, north=10.5, east=20.5)
"""

from areasel_draw.geometry import Point, LatLngBounds, AreaCoordinates
from areasel_draw.surface import (
    SHAPE_CREATED,
    RECTANGLE,
    DrawOptions,
    ShapeStyle,
    Subscription,
    DrawnShape,
    OverlayGroup,
    MapSurface,
)
from areasel_draw.errors import (
    AreaSelectorError,
    ToolInitializationFailure,
    ShapeExtractionFailure,
    ControllerClosedError,
)
from areasel_draw.controller import (
    ControllerState,
    ControllerHandle,
    DrawController,
    attach,
    extract_area,
)

__all__ = [
    # Geometry
    "Point",
    "LatLngBounds",
    "AreaCoordinates",
    # Surface contract
    "SHAPE_CREATED",
    "RECTANGLE",
    "DrawOptions",
    "ShapeStyle",
    "Subscription",
    "DrawnShape",
    "OverlayGroup",
    "MapSurface",
    # Errors
    "AreaSelectorError",
    "ToolInitializationFailure",
    "ShapeExtractionFailure",
    "ControllerClosedError",
    # Controller
    "ControllerState",
    "ControllerHandle",
    "DrawController",
    "attach",
    "extract_area",
]

__version__ = "1.0.0"
