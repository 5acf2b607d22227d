"""Campus navigation core: graph building, node snapping and A* walking routes."""

from .geo_utils import calculate_bearing, haversine_distance, point_in_polygon
from .graph_builder import build_graph, is_edge_blocked
from .ingest import (
    InvalidCoordinateError,
    InvalidRowError,
    NavigationDataError,
    normalize_coords,
)
from .models import (
    Blockage,
    Coord,
    Edge,
    LatLngBounds,
    NavigationPlan,
    Node,
    PathError,
    PathResult,
    RouteStep,
    TurnKind,
    UpcomingTurn,
)
from .nav_config import NavConfig
from .navigator import CampusNavigator
from .node_locator import find_nearest_connected_node, find_nearest_node, find_nearest_reachable_node
from .presentation import (
    bounds_with_padding,
    build_route_steps,
    detect_turn,
    estimate_eta,
    find_upcoming_turn,
    straight_line_path,
    to_line_feature,
)
from .reachability import can_reach
from .route_calculator import PathRequest, find_path, find_path_between_nodes

__version__ = "0.1.0"
