# presentation.py
# Turns a computed route into what the map, camera and guidance layers draw:
# a GeoJSON line, padded camera bounds, turn classification, ETA text and
# step-by-step instructions.

import math
from typing import Any, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, MultiPoint, mapping

from .geo_utils import calculate_bearing, haversine_distance, normalize_angle
from .ingest import normalize_coords
from .models import Coord, LatLngBounds, Node, RouteStep, TurnKind, UpcomingTurn
from .nav_config import NavConfig, WALKING_SPEED_MPS


TURN_TEXT = {
    TurnKind.LEFT:         "Turn left",
    TurnKind.RIGHT:        "Turn right",
    TurnKind.SLIGHT_LEFT:  "Bear left",
    TurnKind.SLIGHT_RIGHT: "Bear right",
    TurnKind.STRAIGHT:     "Go straight",
}


# ---------------------------------------------------------------------------
# Map drawing
# ---------------------------------------------------------------------------

def to_line_feature(path_coords: Sequence[Sequence[float]], epsilon: float = 0.00001) -> dict:
    """
    Wrap a [lng, lat] path as a GeoJSON FeatureCollection with one LineString.

    A single point gets a second point nudged by ``epsilon`` degrees so the
    line stays valid. An empty path gives an empty collection.
    """
    if not path_coords:
        return {"type": "FeatureCollection", "features": []}

    coords = [(float(p[0]), float(p[1])) for p in path_coords]
    if len(coords) == 1:
        lng, lat = coords[0]
        coords.append((lng + epsilon, lat + epsilon))

    geometry = mapping(LineString(coords))
    return {
        "type": "FeatureCollection",
        "features": [{
            "type": "Feature",
            "properties": {},
            "geometry": {
                "type": geometry["type"],
                "coordinates": [list(c) for c in geometry["coordinates"]],
            },
        }],
    }


def bounds_with_padding(
    path_coords: Sequence[Sequence[float]], padding: float = 0.0005
) -> Optional[LatLngBounds]:
    """
    Bounding box of the path grown by ``padding`` degrees on every side.

    Returns:
        LatLngBounds with [lng, lat] corners, or None for an empty path.
    """
    if not path_coords:
        return None
    min_lng, min_lat, max_lng, max_lat = MultiPoint([(p[0], p[1]) for p in path_coords]).bounds
    return LatLngBounds(
        northeast=(max_lng + padding, max_lat + padding),
        southwest=(min_lng - padding, min_lat - padding),
    )


def straight_line_path(start: Any, end: Any) -> List[List[float]]:
    """Two-point preview drawn when no walking route could be found."""
    return [normalize_coords(start).as_lnglat(), normalize_coords(end).as_lnglat()]


# ---------------------------------------------------------------------------
# Guidance
# ---------------------------------------------------------------------------

def detect_turn(prev, current, nxt, config: Optional[NavConfig] = None) -> Optional[TurnKind]:
    """
    Classify the change of heading at ``current``.

    Args:
        prev, current, nxt: Consecutive waypoints (anything with lat/lon).
        config:             Thresholds; NavConfig() defaults if omitted.

    Returns:
        TurnKind, or None if a waypoint is missing.
    """
    if prev is None or current is None or nxt is None:
        return None
    config = config or NavConfig()

    b1 = calculate_bearing(prev.lat, prev.lon, current.lat, current.lon)
    b2 = calculate_bearing(current.lat, current.lon, nxt.lat, nxt.lon)
    turn = normalize_angle(b2 - b1)

    if turn > config.sharp_turn_deg:
        return TurnKind.RIGHT
    if turn < -config.sharp_turn_deg:
        return TurnKind.LEFT
    if turn > config.slight_turn_deg:
        return TurnKind.SLIGHT_RIGHT
    if turn < -config.slight_turn_deg:
        return TurnKind.SLIGHT_LEFT
    return TurnKind.STRAIGHT


def estimate_eta(distance_meters: float, walking_speed_mps: float = WALKING_SPEED_MPS) -> str:
    """Walking time as "Xm Ys", or "Ys" under a minute."""
    seconds = int(math.floor(distance_meters / walking_speed_mps + 0.5))
    minutes, rest = divmod(seconds, 60)
    if minutes > 0:
        return f"{minutes}m {rest}s"
    return f"{seconds}s"


def find_upcoming_turn(
    location: Any,
    path_nodes: Sequence[Node],
    config: Optional[NavConfig] = None,
) -> Tuple[Optional[Node], Optional[UpcomingTurn]]:
    """
    Next waypoint and next real turn for a walker at ``location``.

    The walker is snapped to the closest node on the path; the first
    non-straight turn from there on is reported with its distance.

    Returns:
        (next_waypoint, upcoming_turn); either may be None.
    """
    if len(path_nodes) < 2:
        return None, None
    config = config or NavConfig()
    here: Coord = normalize_coords(location)

    distances = [haversine_distance(here.lat, here.lon, n.lat, n.lon) for n in path_nodes]
    closest = distances.index(min(distances))
    next_waypoint = path_nodes[min(closest + 1, len(path_nodes) - 1)]

    for i in range(closest, len(path_nodes) - 2):
        kind = detect_turn(path_nodes[i], path_nodes[i + 1], path_nodes[i + 2], config)
        if kind is not None and kind is not TurnKind.STRAIGHT:
            pivot = path_nodes[i + 1]
            dist = haversine_distance(here.lat, here.lon, pivot.lat, pivot.lon)
            return next_waypoint, UpcomingTurn(
                kind=kind,
                distance_m=int(round(dist)),
                node=pivot,
                imminent=dist < config.turn_alert_m,
            )
    return next_waypoint, None


def build_route_steps(path_nodes: Sequence[Node], config: Optional[NavConfig] = None) -> List[RouteStep]:
    """
    Turn-by-turn instructions for a node path.

    One "start" step, one step per non-straight turn carrying the distance
    walked since the previous step, and a "finish" step.
    """
    if not path_nodes:
        return []
    config = config or NavConfig()

    first = path_nodes[0]
    steps = [RouteStep(
        step_id=0,
        text="Navigation starting. Follow the highlighted path.",
        location=first.coord,
        action="start",
        distance_meters=0,
    )]

    dist_accum = 0.0
    for i in range(1, len(path_nodes)):
        prev, node = path_nodes[i - 1], path_nodes[i]
        dist_accum += haversine_distance(prev.lat, prev.lon, node.lat, node.lon)

        if i == len(path_nodes) - 1:
            break
        kind = detect_turn(prev, node, path_nodes[i + 1], config)
        if kind is TurnKind.STRAIGHT:
            continue

        steps.append(RouteStep(
            step_id=len(steps),
            text=f"After {int(dist_accum)} m, {TURN_TEXT[kind].lower()}.",
            location=node.coord,
            action=kind.value,
            distance_meters=int(dist_accum),
        ))
        dist_accum = 0.0

    last = path_nodes[-1]
    steps.append(RouteStep(
        step_id=len(steps),
        text=f"After {int(dist_accum)} m, you have reached your destination.",
        location=last.coord,
        action="finish",
        distance_meters=int(dist_accum),
    ))
    return steps
