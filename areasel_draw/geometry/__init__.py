"""
Geometry Layer
==============

Bounded Context: Geographic value types.

Responsibilities:
- Point / bounds representation (immutable)
- Closed rectangle ring construction
- Vertex list -> bounds extraction
- NO state, NO map library, NO drawing
"""

from areasel_draw.geometry.shapes import Point, LatLngBounds, AreaCoordinates
from areasel_draw.geometry.vertices import (
    as_vertex_array,
    bounds_from_vertices,
    is_axis_aligned_rectangle,
)

__all__ = [
    "Point",
    "LatLngBounds",
    "AreaCoordinates",
    "as_vertex_array",
    "bounds_from_vertices",
    "is_axis_aligned_rectangle",
]
