"""
Geometry value types and numpy vertex helpers.

Usage:
    pytest test_area_geometry.py
"""

import math

import pytest

from areasel_draw import AreaCoordinates, LatLngBounds, Point
from areasel_draw.geometry import bounds_from_vertices, is_axis_aligned_rectangle

RING = [[10.5, 20.0], [10.5, 20.5], [10.0, 20.5], [10.0, 20.0], [10.5, 20.0]]

# GeoJSON (lng, lat) ring in the SW, NW, NE, SE order Leaflet.draw reports
LEAFLET_RECTANGLE = [[20.0, 10.0], [20.0, 10.5], [20.5, 10.5], [20.5, 10.0], [20.0, 10.0]]


class TestPoint:
    def test_valid_point(self):
        point = Point(lat=55.75, lng=37.61)
        assert point.to_list() == [55.75, 37.61]
        assert point.to_tuple() == (55.75, 37.61)

    @pytest.mark.parametrize("lat,lng", [
        (90.1, 0.0),
        (-91.0, 0.0),
        (0.0, 180.5),
        (0.0, -181.0),
        (math.nan, 0.0),
        (0.0, math.inf),
    ])
    def test_out_of_range_rejected(self, lat, lng):
        with pytest.raises(ValueError):
            Point(lat=lat, lng=lng)

    def test_point_is_immutable(self):
        point = Point(lat=1.0, lng=2.0)
        with pytest.raises(AttributeError):
            point.lat = 3.0


class TestLatLngBounds:
    def test_corners(self):
        bounds = LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
        assert bounds.north_west == Point(10.5, 20.0)
        assert bounds.north_east == Point(10.5, 20.5)
        assert bounds.south_east == Point(10.0, 20.5)
        assert bounds.south_west == Point(10.0, 20.0)

    @pytest.mark.parametrize("south,west,north,east", [
        (10.0, 20.0, 10.0, 20.5),
        (10.0, 20.0, 10.5, 20.0),
        (10.5, 20.0, 10.0, 20.5),
    ])
    def test_degenerate_bounds_rejected(self, south, west, north, east):
        with pytest.raises(ValueError, match="Degenerate"):
            LatLngBounds(south=south, west=west, north=north, east=east)

    def test_from_corners_ignores_drag_direction(self):
        dragged_down_right = LatLngBounds.from_corners((10.5, 20.0), (10.0, 20.5))
        dragged_up_left = LatLngBounds.from_corners((10.0, 20.5), (10.5, 20.0))

        assert dragged_down_right == dragged_up_left
        assert dragged_down_right.to_dict() == {
            'south': 10.0, 'west': 20.0, 'north': 10.5, 'east': 20.5,
        }


class TestAreaCoordinates:
    def test_ring_from_bounds(self):
        area = AreaCoordinates.from_bounds(
            LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
        )
        assert area.to_list() == RING
        assert len(area) == 5
        assert area[0] == area[-1]
        assert area.points[1] == Point(10.5, 20.5)

    def test_from_list(self):
        area = AreaCoordinates.from_list(RING)
        assert area.bounds == LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)

    def test_equality_and_hash_follow_bounds(self):
        a = AreaCoordinates.from_list(RING)
        b = AreaCoordinates.from_bounds(a.bounds)
        assert a == b
        assert len({a, b}) == 1

    @pytest.mark.parametrize("ring", [
        RING[:4],
        RING + [RING[0]],
        [RING[1], RING[2], RING[3], RING[0], RING[1]],
        [RING[0], RING[3], RING[2], RING[1], RING[0]],
        [[10.5, 20.0], [10.5, 20.5], [10.0, 20.5], [10.0, 20.0], [10.4, 20.0]],
        [[10.5, 20.0], [10.5], [10.0, 20.5], [10.0, 20.0], [10.5, 20.0]],
        [[10.5, 20.0], ["x", 1], [10.0, 20.5], [10.0, 20.0], [10.5, 20.0]],
    ])
    def test_from_list_rejects_bad_rings(self, ring):
        with pytest.raises(ValueError):
            AreaCoordinates.from_list(ring)


class TestVertices:
    def test_bounds_from_leaflet_rectangle(self):
        bounds = bounds_from_vertices(LEAFLET_RECTANGLE)
        assert bounds == LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)

    def test_altitude_is_dropped(self):
        bounds = bounds_from_vertices([[20.0, 10.0, 150.0], [20.5, 10.5, 160.0]])
        assert bounds == LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)

    @pytest.mark.parametrize("positions", [
        [],
        [[1.0], [2.0]],
        [[20.0, 10.0], [20.0, 10.0]],
        [[20.0, math.nan], [21.0, 11.0]],
    ])
    def test_bad_vertices_rejected(self, positions):
        with pytest.raises(ValueError):
            bounds_from_vertices(positions)

    def test_rectangle_detection(self):
        assert is_axis_aligned_rectangle(LEAFLET_RECTANGLE)
        assert is_axis_aligned_rectangle(LEAFLET_RECTANGLE[:-1])

    @pytest.mark.parametrize("positions", [
        [[20.0, 10.0], [20.2, 10.5], [20.5, 10.0], [20.0, 10.0]],
        [[20.0, 10.0], [20.1, 10.5], [20.5, 10.5], [20.5, 10.0], [20.0, 10.0]],
        [[20.0, 10.0], [20.0, 10.5], [20.5, 10.5], [20.5, 10.0], [20.2, 10.0], [20.0, 10.0]],
        [[20.0, 10.0], [20.0, 10.5], [20.0, 10.5], [20.5, 10.0], [20.0, 10.0]],
        # Moscow-scale ring, north-west corner pushed 0.0003 degrees east
        [[37.5, 55.7], [37.5003, 55.8], [37.7, 55.8], [37.7, 55.7], [37.5, 55.7]],
        "not vertices",
    ])
    def test_non_rectangles(self, positions):
        assert not is_axis_aligned_rectangle(positions)
