# models.py
# Shared data structures and enums used across all modules.

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

NodeId = Union[str, int]


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate."""
    lat: float
    lon: float

    def as_lnglat(self) -> List[float]:
        """[lng, lat] pair, the order map layers expect."""
        return [self.lon, self.lat]


# ---------------------------------------------------------------------------
# Source collections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """A navigable point on campus."""
    id: NodeId
    lat: float
    lon: float

    @property
    def coord(self) -> Coord:
        return Coord(self.lat, self.lon)

    def as_lnglat(self) -> List[float]:
        return [self.lon, self.lat]


@dataclass(frozen=True)
class Edge:
    """Undirected connection between two nodes. A missing or non-positive weight means use the geographic distance."""
    from_id: NodeId
    to_id: NodeId
    weight: Optional[float] = None


@dataclass(frozen=True)
class Blockage:
    """Polygon marking a temporarily impassable area."""
    id: NodeId
    active: bool
    points: Tuple[Coord, ...] = ()


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Neighbor:
    node_id: NodeId
    cost: float


@dataclass
class GraphNode:
    node: Node
    neighbors: List[Neighbor] = field(default_factory=list)

    @property
    def is_connected(self) -> bool:
        return len(self.neighbors) > 0


Graph = Dict[NodeId, GraphNode]


# ---------------------------------------------------------------------------
# Path result
# ---------------------------------------------------------------------------

class PathError(Enum):
    INPUT_MISSING          = "input_missing"
    DESTINATION_UNRESOLVED = "destination_unresolved"
    ORIGIN_UNRESOLVED      = "origin_unresolved"
    DISCONNECTED           = "disconnected"
    ISOLATED               = "isolated"
    SEARCH_EXHAUSTED       = "search_exhausted"


@dataclass
class PathResult:
    """
    Outcome of a route request.

    Failures are reported through ``error`` / ``error_kind`` with an empty
    path and zero distance. Always check ``ok`` before using the path.
    """
    path: List[List[float]] = field(default_factory=list)   # [lng, lat] pairs
    path_nodes: List[Node] = field(default_factory=list)
    distance: float = 0
    error: Optional[str] = None
    error_kind: Optional[PathError] = None
    start_node: Optional[Node] = None
    end_node: Optional[Node] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        d = {
            "path": [list(p) for p in self.path],
            "pathNodes": [
                {"id": n.id, "lat": n.lat, "lng": n.lon} for n in self.path_nodes
            ],
            "distance": self.distance,
        }
        if self.error is not None:
            d["error"] = self.error
        if self.start_node is not None:
            d["startNode"] = {"id": self.start_node.id, "lat": self.start_node.lat, "lng": self.start_node.lon}
        if self.end_node is not None:
            d["endNode"] = {"id": self.end_node.id, "lat": self.end_node.lat, "lng": self.end_node.lon}
        return d


# ---------------------------------------------------------------------------
# Presentation / guidance
# ---------------------------------------------------------------------------

class TurnKind(Enum):
    LEFT         = "left"
    RIGHT        = "right"
    SLIGHT_LEFT  = "slight-left"
    SLIGHT_RIGHT = "slight-right"
    STRAIGHT     = "straight"


@dataclass(frozen=True)
class LatLngBounds:
    """Axis-aligned camera bounds, corners as [lng, lat]."""
    northeast: Tuple[float, float]
    southwest: Tuple[float, float]


@dataclass
class UpcomingTurn:
    """Next non-straight turn ahead of the walker."""
    kind: TurnKind
    distance_m: int
    node: Node
    imminent: bool = False       # inside NavConfig.turn_alert_m


@dataclass
class RouteStep:
    """A single guidance instruction in a route."""
    step_id: int
    text: str
    location: Coord
    action: str                  # "start" | TurnKind value | "finish"
    distance_meters: int

    def to_dict(self) -> dict:
        return {
            "step_id": self.step_id,
            "text": self.text,
            "location": {"lat": self.location.lat, "lon": self.location.lon},
            "action": self.action,
            "distance_meters": self.distance_meters,
        }


@dataclass
class NavigationPlan:
    """Everything the map and guidance layers need for one route request."""
    result: PathResult
    feature: dict                            # GeoJSON FeatureCollection
    bounds: Optional[LatLngBounds]
    eta: str
    steps: List[RouteStep] = field(default_factory=list)
    is_fallback: bool = False                # straight-line preview, no walking route
