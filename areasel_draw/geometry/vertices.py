"""
Vertex math for drawn shapes.

Drawing tools report GeoJSON positions, i.e. (lng, lat) pairs. These helpers
turn such a vertex list into bounds and tell an axis-aligned rectangle apart
from a free polygon.
"""

from typing import Sequence

import numpy as np

from areasel_draw.geometry.shapes import LatLngBounds

# Degrees; about 0.1 mm on the ground
EDGE_TOLERANCE = 1e-9


def as_vertex_array(positions: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Convert GeoJSON positions to an Nx2 float array of (lng, lat).

    Raises:
        ValueError: If the positions are not a non-empty Nx2 list of finite numbers
    """
    try:
        vertices = np.asarray(positions, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid vertex data: {e}")

    if vertices.ndim != 2 or vertices.shape[1] < 2:
        raise ValueError(f"vertices must be Nx2 array, got shape {vertices.shape}")
    if len(vertices) == 0:
        raise ValueError("vertices must not be empty")

    # Positions may carry an altitude as a third ordinate
    vertices = vertices[:, :2]
    if not np.all(np.isfinite(vertices)):
        raise ValueError("vertices must be finite")
    return vertices


def bounds_from_vertices(positions: Sequence[Sequence[float]]) -> LatLngBounds:
    """
    Bounding rectangle of (lng, lat) vertices.

    Raises:
        ValueError: If vertices are malformed or span zero area
    """
    vertices = as_vertex_array(positions)
    west, south = vertices.min(axis=0)
    east, north = vertices.max(axis=0)
    return LatLngBounds(
        south=float(south),
        west=float(west),
        north=float(north),
        east=float(east),
    )


def _on_edge(values: np.ndarray, low: float, high: float) -> np.ndarray:
    # Absolute tolerance, same at any longitude
    return (
        np.isclose(values, low, rtol=0.0, atol=EDGE_TOLERANCE)
        | np.isclose(values, high, rtol=0.0, atol=EDGE_TOLERANCE)
    )


def is_axis_aligned_rectangle(positions: Sequence[Sequence[float]]) -> bool:
    """
    True if a closed ring has 4 distinct corners lying on its own bounds.

    Accepts the ring with or without the repeated closing vertex.
    """
    try:
        vertices = as_vertex_array(positions)
    except ValueError:
        return False

    if len(vertices) > 1 and np.array_equal(vertices[0], vertices[-1]):
        vertices = vertices[:-1]
    if len(vertices) != 4:
        return False

    low = vertices.min(axis=0)
    high = vertices.max(axis=0)
    on_lng_edge = _on_edge(vertices[:, 0], low[0], high[0])
    on_lat_edge = _on_edge(vertices[:, 1], low[1], high[1])
    if not (on_lng_edge.all() and on_lat_edge.all()):
        return False

    corners = {tuple(np.round(v, 12)) for v in vertices}
    return len(corners) == 4
