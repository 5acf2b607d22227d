# ingest.py
# Adapter between the realtime data-sync layer and the routing core.
# Raw table rows (plain mappings) become Node / Edge / Blockage objects here,
# so nothing downstream has to care how a row spelled its field names.

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .models import Blockage, Coord, Edge, Node

logger = logging.getLogger(__name__)


class NavigationDataError(ValueError):
    """Input that cannot be turned into routing data."""


class InvalidRowError(NavigationDataError):
    """A node / edge / blockage row is missing fields or has the wrong types."""


class InvalidCoordinateError(NavigationDataError):
    """A coordinate value is not a [lng, lat] pair or a lat/lng mapping."""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lng", "lon", "longitude")


def _first_present(row: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _to_float(value: Any, what: str, error_cls=InvalidRowError) -> float:
    if isinstance(value, bool):
        raise error_cls(f"{what} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise error_cls(f"{what} must be a number, got {value!r}") from e


def _lat_lon(row: Mapping[str, Any], what: str, error_cls=InvalidRowError) -> Tuple[float, float]:
    lat = _first_present(row, _LAT_KEYS)
    lon = _first_present(row, _LON_KEYS)
    if lat is None or lon is None:
        raise error_cls(f"{what} has no latitude/longitude: {dict(row)!r}")
    return _to_float(lat, f"{what} latitude", error_cls), _to_float(lon, f"{what} longitude", error_cls)


# ---------------------------------------------------------------------------
# Single rows
# ---------------------------------------------------------------------------

def node_from_row(row: Mapping[str, Any]) -> Node:
    """
    Build a Node from a sync-layer row.

    Accepts ``lat``/``lng``, ``lat``/``lon`` or ``latitude``/``longitude``.

    Raises:
        InvalidRowError: Missing id or coordinates, or non-numeric coordinates.
    """
    if not isinstance(row, Mapping):
        raise InvalidRowError(f"Node row must be a mapping, got {type(row).__name__}")
    node_id = row.get("id")
    if node_id is None:
        raise InvalidRowError(f"Node row has no id: {dict(row)!r}")
    lat, lon = _lat_lon(row, f"Node {node_id!r}")
    return Node(id=node_id, lat=lat, lon=lon)


def edge_from_row(row: Mapping[str, Any]) -> Edge:
    """
    Build an Edge from a sync-layer row.

    ``from_node``/``to_node`` win over ``from``/``to`` when both are present.
    A missing, zero or negative weight falls back to the geographic distance
    when the graph is built.

    Raises:
        InvalidRowError: Missing endpoint ids or a non-numeric weight.
    """
    if not isinstance(row, Mapping):
        raise InvalidRowError(f"Edge row must be a mapping, got {type(row).__name__}")
    from_id = _first_present(row, ("from_node", "from"))
    to_id = _first_present(row, ("to_node", "to"))
    if from_id is None or to_id is None:
        raise InvalidRowError(f"Edge row needs both endpoints: {dict(row)!r}")

    weight: Optional[float] = None
    raw_weight = row.get("weight")
    if raw_weight is not None:
        weight = _to_float(raw_weight, f"Edge {from_id!r}->{to_id!r} weight")
        if weight <= 0:
            weight = None
    return Edge(from_id=from_id, to_id=to_id, weight=weight)


def blockage_from_row(row: Mapping[str, Any]) -> Blockage:
    """
    Build a Blockage from a sync-layer row.

    ``points`` is a list of ``{lat, lng}`` vertices; a row without points
    yields an empty polygon, which never blocks anything.

    Raises:
        InvalidRowError: Malformed vertex.
    """
    if not isinstance(row, Mapping):
        raise InvalidRowError(f"Blockage row must be a mapping, got {type(row).__name__}")
    blockage_id = row.get("id")
    points = []
    for i, vertex in enumerate(row.get("points") or ()):
        if not isinstance(vertex, Mapping):
            raise InvalidRowError(f"Blockage {blockage_id!r} vertex {i} must be a mapping")
        lat, lon = _lat_lon(vertex, f"Blockage {blockage_id!r} vertex {i}")
        points.append(Coord(lat, lon))
    return Blockage(id=blockage_id, active=bool(row.get("active", False)), points=tuple(points))


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

def nodes_from_rows(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[Node]:
    return [node_from_row(r) for r in rows or ()]


def edges_from_rows(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[Edge]:
    return [edge_from_row(r) for r in rows or ()]


def blockages_from_rows(rows: Optional[Iterable[Mapping[str, Any]]]) -> List[Blockage]:
    blockages = [blockage_from_row(r) for r in rows or ()]
    degenerate = sum(1 for b in blockages if b.active and len(b.points) < 3)
    if degenerate:
        logger.warning(f"{degenerate} active blockage(s) have fewer than 3 points and will be ignored.")
    return blockages


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------

def normalize_coords(value: Any) -> Optional[Coord]:
    """
    Turn a caller-supplied position into a Coord.

    Accepts a Coord, a ``[lng, lat]`` sequence, or a mapping with
    ``longitude``/``latitude`` (or ``lng``/``lat``) keys. None passes through.

    Raises:
        InvalidCoordinateError: Anything else.
    """
    if value is None or isinstance(value, Coord):
        return value
    if isinstance(value, Mapping):
        lat, lon = _lat_lon(value, "Coordinate", InvalidCoordinateError)
        return Coord(lat, lon)
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise InvalidCoordinateError(f"Coordinate pair must be [lng, lat], got {value!r}")
        lon = _to_float(value[0], "Coordinate longitude", InvalidCoordinateError)
        lat = _to_float(value[1], "Coordinate latitude", InvalidCoordinateError)
        return Coord(lat, lon)
    raise InvalidCoordinateError(f"Unsupported coordinate value: {value!r}")


# ---------------------------------------------------------------------------
# Boundary checks for already-adapted collections
# ---------------------------------------------------------------------------

def ensure_nodes(items: Optional[Iterable[Any]]) -> List[Node]:
    """
    Accept Node objects or raw rows; anything else is rejected.

    Repeated ids collapse to the last node seen, the one the graph keeps.
    """
    by_id = {}
    total = 0
    for item in items or ():
        node = _ensure(item, Node, node_from_row)
        by_id[node.id] = node
        total += 1
    if total > len(by_id):
        logger.warning(f"{total - len(by_id)} duplicate node id(s) found; keeping the last of each.")
    return list(by_id.values())


def ensure_edges(items: Optional[Iterable[Any]]) -> List[Edge]:
    return [_ensure(item, Edge, edge_from_row) for item in items or ()]


def ensure_blockages(items: Optional[Iterable[Any]]) -> List[Blockage]:
    return [_ensure(item, Blockage, blockage_from_row) for item in items or ()]


def _ensure(item: Any, cls: type, from_row) -> Any:
    if isinstance(item, cls):
        return item
    if isinstance(item, Mapping):
        return from_row(item)
    raise InvalidRowError(f"Expected {cls.__name__} or a row mapping, got {type(item).__name__}")
