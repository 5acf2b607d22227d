import itertools
import math

import pytest

from campus_nav.geo_utils import (
    EARTH_RADIUS_M,
    calculate_bearing,
    haversine_distance,
    normalize_angle,
    point_in_polygon,
)
from campus_nav.models import Coord

SAMPLE_POINTS = [
    (0.0, 0.0),
    (14.8448, 120.8103),
    (-33.86, 151.21),
    (51.5, -0.12),
    (89.9, 10.0),
    (-45.0, -179.5),
]


def test_haversine_is_symmetric_and_zero_on_identity():
    for (lat1, lon1), (lat2, lon2) in itertools.product(SAMPLE_POINTS, repeat=2):
        assert haversine_distance(lat1, lon1, lat2, lon2) == pytest.approx(
            haversine_distance(lat2, lon2, lat1, lon1)
        )
    for lat, lon in SAMPLE_POINTS:
        assert haversine_distance(lat, lon, lat, lon) == 0


def test_haversine_one_degree_of_latitude():
    expected = EARTH_RADIUS_M * math.pi / 180
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(expected, rel=1e-9)
    assert expected == pytest.approx(111_195, abs=1)


def test_bearing_cardinal_directions():
    assert calculate_bearing(0, 0, 1, 0) == pytest.approx(0)
    assert calculate_bearing(0, 0, 0, 1) == pytest.approx(90)
    assert calculate_bearing(0, 0, -1, 0) == pytest.approx(180)
    assert calculate_bearing(0, 0, 0, -1) == pytest.approx(270)


def test_bearing_always_in_range():
    for (lat1, lon1), (lat2, lon2) in itertools.product(SAMPLE_POINTS, repeat=2):
        b = calculate_bearing(lat1, lon1, lat2, lon2)
        assert 0 <= b < 360


def test_normalize_angle_half_open_range():
    assert normalize_angle(190) == pytest.approx(-170)
    assert normalize_angle(-190) == pytest.approx(170)
    assert normalize_angle(180) == 180
    assert normalize_angle(-180) == 180
    assert normalize_angle(0) == 0


def test_point_in_polygon_known_square():
    # (lng, lat) square (0,0) (0,10) (10,10) (10,0)
    polygon = [Coord(0, 0), Coord(10, 0), Coord(10, 10), Coord(0, 10)]
    assert point_in_polygon(5, 5, polygon)
    assert not point_in_polygon(15, 15, polygon)
    assert not point_in_polygon(-1, 5, polygon)


def test_point_in_polygon_concave():
    # U shape open to the north, notch between lng 1 and 2
    polygon = [
        Coord(0, 0), Coord(0, 3), Coord(3, 3), Coord(3, 2),
        Coord(1, 2), Coord(1, 1), Coord(3, 1), Coord(3, 0),
    ]
    assert point_in_polygon(0.5, 0.5, polygon)
    assert not point_in_polygon(1.5, 2.0, polygon)


def test_point_in_polygon_needs_three_vertices():
    assert not point_in_polygon(0, 0, [])
    assert not point_in_polygon(0.5, 0.5, [Coord(0, 0), Coord(1, 1)])


@pytest.mark.parametrize("lat, lon", [
    (69.51232454868148, 86.5812282599507),
    (-85.74577602624232, -40.83944228587086),
    (0.0, 0.0),
    (45.0, 179.0),
    (-12.3, -77.7),
])
def test_haversine_antipodal_points(lat, lon):
    assert haversine_distance(lat, lon, -lat, lon + 180) == pytest.approx(
        math.pi * EARTH_RADIUS_M, rel=1e-6
    )


def test_point_in_polygon_accepts_vertex_mappings():
    polygon = [
        {"lng": 0, "lat": 0}, {"lng": 0, "lat": 10},
        {"lng": 10, "lat": 10}, {"lon": 10, "lat": 0},
    ]
    assert point_in_polygon(5, 5, polygon)
    assert not point_in_polygon(15, 15, polygon)
