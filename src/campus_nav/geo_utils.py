# geo_utils.py
# Pure mathematical / geographic helper functions.
# No side effects, no imports from other project modules.

import math
from typing import Any, Mapping, Sequence, Tuple

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Forward azimuth (bearing) from point 1 to point 2 in degrees [0, 360).

    0 is north, angles grow clockwise.
    """
    rlat1, rlat2 = math.radians(lat1), math.radians(lat2)
    d_lon = math.radians(lon2 - lon1)
    y = math.sin(d_lon) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def normalize_angle(diff: float) -> float:
    """Fold an angle difference into (-180, 180]."""
    diff = diff % 360
    if diff > 180:
        diff -= 360
    return diff


def _vertex_lng_lat(vertex: Any) -> Tuple[float, float]:
    if isinstance(vertex, Mapping):
        lng = vertex["lng"] if "lng" in vertex else vertex["lon"]
        return lng, vertex["lat"]
    return vertex.lon, vertex.lat


def point_in_polygon(lng: float, lat: float, polygon: Sequence) -> bool:
    """
    Ray casting (edge-crossing parity) test.

    Args:
        lng, lat: Point to test.
        polygon:  Ordered vertices. Each is a Coord (``lat``/``lon``
                  attributes) or a ``{lng, lat}`` mapping; ``lon`` is
                  accepted as a mapping key too.

    Returns:
        True if the point is inside. Points exactly on an edge or vertex fall
        wherever the crossing formula puts them. Fewer than 3 vertices is
        never inside.
    """
    n = len(polygon)
    if n < 3:
        return False

    vertices = [_vertex_lng_lat(v) for v in polygon]
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > lat) != (yj > lat):
            x_cross = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lng < x_cross:
                inside = not inside
        j = i
    return inside
