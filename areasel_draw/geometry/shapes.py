"""
Geographic Shapes Module
========================

Pure geographic value types - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Validation in __post_init__ (fail-fast)
- The closed ring is built from bounds, never assembled by hand
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def _check_latitude(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    low, high = LATITUDE_RANGE
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


def _check_longitude(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    low, high = LONGITUDE_RANGE
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


@dataclass(frozen=True)
class Point:
    """
    Immutable (latitude, longitude) pair in degrees.

    Attributes:
        lat: Latitude in [-90, 90]
        lng: Longitude in [-180, 180]
    """

    lat: float
    lng: float

    def __post_init__(self):
        """Validate ranges."""
        _check_latitude("lat", self.lat)
        _check_longitude("lng", self.lng)

    def to_list(self) -> List[float]:
        return [self.lat, self.lng]

    def to_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class LatLngBounds:
    """
    Immutable axis-aligned bounding rectangle.

    Invariants:
        - every edge is a valid latitude/longitude
        - south < north, west < east (zero-area bounds are degenerate)

    Example:
        >>> bounds = LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
        >>> bounds.north_west
        Point(lat=10.5, lng=20.0)
    """

    south: float
    west: float
    north: float
    east: float

    def __post_init__(self):
        """Validate edges and reject degenerate rectangles."""
        _check_latitude("south", self.south)
        _check_latitude("north", self.north)
        _check_longitude("west", self.west)
        _check_longitude("east", self.east)

        if not self.south < self.north:
            raise ValueError(
                f"Degenerate bounds: south ({self.south}) must be < north ({self.north})"
            )
        if not self.west < self.east:
            raise ValueError(
                f"Degenerate bounds: west ({self.west}) must be < east ({self.east})"
            )

    @classmethod
    def from_corners(
        cls,
        corner_a: Tuple[float, float],
        corner_b: Tuple[float, float]
    ) -> 'LatLngBounds':
        """
        Build bounds from any two opposite (lat, lng) corners.

        Drag direction does not matter: the corners are sorted.
        """
        (lat_a, lng_a), (lat_b, lng_b) = corner_a, corner_b
        return cls(
            south=float(min(lat_a, lat_b)),
            west=float(min(lng_a, lng_b)),
            north=float(max(lat_a, lat_b)),
            east=float(max(lng_a, lng_b)),
        )

    @property
    def north_west(self) -> Point:
        return Point(lat=self.north, lng=self.west)

    @property
    def north_east(self) -> Point:
        return Point(lat=self.north, lng=self.east)

    @property
    def south_east(self) -> Point:
        return Point(lat=self.south, lng=self.east)

    @property
    def south_west(self) -> Point:
        return Point(lat=self.south, lng=self.west)

    def to_dict(self) -> dict:
        return {
            'south': self.south,
            'west': self.west,
            'north': self.north,
            'east': self.east,
        }


class AreaCoordinates:
    """
    Closed rectangle ring [NW, NE, SE, SW, NW].

    Always five points, first == last. Instances come from from_bounds()
    (or from_list(), which re-derives the ring and checks it matches).

    Example:
        >>> area = AreaCoordinates.from_bounds(
        ...     LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
        ... )
        >>> area.to_list()
        [[10.5, 20.0], [10.5, 20.5], [10.0, 20.5], [10.0, 20.0], [10.5, 20.0]]
    """

    __slots__ = ('_bounds', '_points')

    def __init__(self, bounds: LatLngBounds):
        nw = bounds.north_west
        self._bounds = bounds
        self._points: Tuple[Point, ...] = (
            nw,
            bounds.north_east,
            bounds.south_east,
            bounds.south_west,
            nw,
        )

    @classmethod
    def from_bounds(cls, bounds: LatLngBounds) -> 'AreaCoordinates':
        return cls(bounds)

    @classmethod
    def from_list(cls, points: Sequence[Sequence[float]]) -> 'AreaCoordinates':
        """
        Parse a [[lat, lng], ...] ring.

        Raises:
            ValueError: If the ring is not a closed NW, NE, SE, SW, NW rectangle
        """
        if len(points) != 5:
            raise ValueError(f"Area ring must have 5 points, got {len(points)}")
        try:
            ring = [Point(lat=float(p[0]), lng=float(p[1])) for p in points]
        except (TypeError, IndexError) as e:
            raise ValueError(f"Invalid area point: {e}")

        nw, se = ring[0], ring[2]
        area = cls(LatLngBounds(south=se.lat, west=nw.lng, north=nw.lat, east=se.lng))
        if list(area) != ring:
            raise ValueError(
                "Area ring must be ordered NW, NE, SE, SW, NW and closed"
            )
        return area

    @property
    def bounds(self) -> LatLngBounds:
        return self._bounds

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    def to_list(self) -> List[List[float]]:
        return [point.to_list() for point in self._points]

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AreaCoordinates):
            return NotImplemented
        return self._bounds == other._bounds

    def __hash__(self) -> int:
        return hash(self._bounds)

    def __repr__(self) -> str:
        return f"AreaCoordinates({self.to_list()!r})"
