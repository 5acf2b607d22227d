# route_calculator.py
# A* pathfinding on a freshly built campus graph.
# Returns a PathResult; routing failures are reported in it, never raised.

import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from .geo_utils import haversine_distance
from .graph_builder import build_graph, connected_node_count
from .ingest import ensure_blockages, ensure_edges, ensure_nodes, normalize_coords
from .models import Coord, Graph, Node, NodeId, PathError, PathResult
from .nav_config import NavConfig
from .node_locator import find_nearest_connected_node, find_nearest_reachable_node
from .reachability import can_reach

logger = logging.getLogger(__name__)


@dataclass
class PathRequest:
    """
    Everything one route calculation needs.

    start_coords / end_coords accept a Coord, a [lng, lat] pair, or a mapping
    with latitude/longitude keys. nodes / edges / blockages accept model
    objects or raw sync-layer rows.
    """
    start_coords: Any
    end_coords: Any
    nodes: Sequence[Any] = field(default_factory=list)
    edges: Sequence[Any] = field(default_factory=list)
    blockages: Sequence[Any] = field(default_factory=list)
    include_endpoints: bool = True


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _failure(
    kind: PathError,
    message: str,
    start_node: Optional[Node] = None,
    end_node: Optional[Node] = None,
) -> PathResult:
    logger.info(f"Routing failed ({kind.value}): {message}")
    return PathResult(error=message, error_kind=kind, start_node=start_node, end_node=end_node)


def _validate_endpoints(graph: Graph, start_node: Node, end_node: Node) -> Optional[PathResult]:
    """Reject isolated or mutually unreachable endpoints before searching."""
    if not graph[start_node.id].is_connected:
        return _failure(
            PathError.ISOLATED,
            f"Start node ({start_node.id}) has no connections. The node network may be incomplete.",
            start_node, end_node,
        )
    if not graph[end_node.id].is_connected:
        return _failure(
            PathError.ISOLATED,
            f"End node ({end_node.id}) has no connections. The node network may be incomplete.",
            start_node, end_node,
        )
    if not can_reach(start_node.id, end_node.id, graph):
        return _failure(
            PathError.DISCONNECTED,
            "Start and end nodes are not connected. The graph may have disconnected components.",
            start_node, end_node,
        )
    return None


def _astar(graph: Graph, start_id: NodeId, end_id: NodeId, max_iterations: int) -> Optional[List[NodeId]]:
    """
    Shortest path by edge cost, straight-line distance to the goal as heuristic.

    Returns the node id sequence from start to end, or None when the open set
    empties or max_iterations expansions pass without reaching the goal.
    """
    goal = graph[end_id].node

    def heuristic(node_id: NodeId) -> float:
        n = graph[node_id].node
        return haversine_distance(n.lat, n.lon, goal.lat, goal.lon)

    counter = 0
    open_set: list = []
    heapq.heappush(open_set, (heuristic(start_id), counter, start_id))
    came_from: dict = {}
    g_score: dict = {start_id: 0.0}
    closed: set = set()
    iterations = 0

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        if iterations >= max_iterations:
            logger.debug(f"A* stopped after {iterations} iterations.")
            return None
        iterations += 1

        if current == end_id:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path

        closed.add(current)
        for neighbor in graph[current].neighbors:
            if neighbor.node_id in closed:
                continue
            tentative = g_score[current] + neighbor.cost
            if tentative < g_score.get(neighbor.node_id, float("inf")):
                came_from[neighbor.node_id] = current
                g_score[neighbor.node_id] = tentative
                counter += 1
                heapq.heappush(open_set, (tentative + heuristic(neighbor.node_id), counter, neighbor.node_id))
    return None


def _path_length(points: List[List[float]]) -> float:
    """Sum of great-circle distances between consecutive [lng, lat] points."""
    return sum(
        haversine_distance(a[1], a[0], b[1], b[0])
        for a, b in zip(points, points[1:])
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_path(request: PathRequest, config: Optional[NavConfig] = None) -> PathResult:
    """
    Walking route between two raw coordinates.

    The graph is rebuilt from the request on every call. The destination is
    snapped to the nearest connected node, the origin to the nearest node
    that can reach it, then A* runs between the two.

    Args:
        request: PathRequest with coordinates and the current data snapshot.
        config:  NavConfig instance (defaults to NavConfig() if omitted).

    Returns:
        PathResult. On failure ``error`` is set and the path is empty.

    Raises:
        NavigationDataError: Coordinates or rows of the wrong shape.
    """
    config = config or NavConfig()

    nodes = ensure_nodes(request.nodes)
    edges = ensure_edges(request.edges)
    if not nodes:
        return _failure(PathError.INPUT_MISSING, "No nodes available for pathfinding")
    if not edges:
        return _failure(PathError.INPUT_MISSING, "No edges available for pathfinding")

    start: Optional[Coord] = normalize_coords(request.start_coords)
    end: Optional[Coord] = normalize_coords(request.end_coords)
    if start is None or end is None:
        return _failure(PathError.INPUT_MISSING, "Start or end coordinates not provided")

    graph = build_graph(nodes, edges, ensure_blockages(request.blockages), config.blockage_samples)
    logger.debug(
        f"Graph built: {len(nodes)} nodes, {len(edges)} edges, "
        f"{connected_node_count(graph)} connected nodes"
    )

    end_node = find_nearest_connected_node(end.lon, end.lat, nodes, graph, config.connected_candidates)
    if end_node is None:
        return _failure(PathError.DESTINATION_UNRESOLVED, "Could not find nearest node to destination")

    start_node = find_nearest_reachable_node(
        start.lon, start.lat, end_node.id, nodes, graph, config.reachable_candidates
    )
    if start_node is None:
        start_node = find_nearest_connected_node(start.lon, start.lat, nodes, graph, config.connected_candidates)
    if start_node is None:
        return _failure(
            PathError.ORIGIN_UNRESOLVED, "Could not find nearest node to start point", end_node=end_node
        )

    logger.debug(
        f"Start node: {start_node.id} ({len(graph[start_node.id].neighbors)} neighbors), "
        f"End node: {end_node.id} ({len(graph[end_node.id].neighbors)} neighbors)"
    )

    failure = _validate_endpoints(graph, start_node, end_node)
    if failure:
        return failure

    if start_node.id == end_node.id:
        if request.include_endpoints:
            coords = [start.as_lnglat(), start_node.as_lnglat(), end.as_lnglat()]
        else:
            coords = [start_node.as_lnglat()]
        return PathResult(
            path=coords,
            path_nodes=[start_node],
            distance=haversine_distance(start.lat, start.lon, end.lat, end.lon),
            start_node=start_node,
            end_node=end_node,
        )

    node_ids = _astar(graph, start_node.id, end_node.id, config.iteration_factor * len(nodes))
    if node_ids is None:
        return _failure(
            PathError.SEARCH_EXHAUSTED,
            "No path found. Check if nodes are connected or if all paths are blocked.",
            start_node, end_node,
        )

    path_nodes = [graph[i].node for i in node_ids]
    coords = [n.as_lnglat() for n in path_nodes]
    if request.include_endpoints:
        # Walk from the literal origin onto the graph and off it to the literal destination
        coords = [start.as_lnglat()] + coords + [end.as_lnglat()]

    return PathResult(
        path=coords,
        path_nodes=path_nodes,
        distance=round(_path_length(coords)),
        start_node=start_node,
        end_node=end_node,
    )


def find_path_between_nodes(
    start_id: NodeId,
    end_id: NodeId,
    nodes: Sequence[Any],
    edges: Sequence[Any],
    blockages: Sequence[Any] = (),
    config: Optional[NavConfig] = None,
) -> PathResult:
    """
    Route between two exact graph nodes, no GPS snapping.

    Used by the map editor to test the network an operator is drawing. The
    returned path holds only node coordinates.
    """
    config = config or NavConfig()

    nodes = ensure_nodes(nodes)
    edges = ensure_edges(edges)
    if not nodes:
        return _failure(PathError.INPUT_MISSING, "No nodes available for pathfinding")
    if not edges:
        return _failure(PathError.INPUT_MISSING, "No edges available for pathfinding")

    graph = build_graph(nodes, edges, ensure_blockages(blockages), config.blockage_samples)
    end_entry = graph.get(end_id)
    if end_entry is None:
        return _failure(PathError.DESTINATION_UNRESOLVED, f"End node ({end_id}) does not exist")
    start_entry = graph.get(start_id)
    if start_entry is None:
        return _failure(
            PathError.ORIGIN_UNRESOLVED, f"Start node ({start_id}) does not exist", end_node=end_entry.node
        )

    start_node, end_node = start_entry.node, end_entry.node
    failure = _validate_endpoints(graph, start_node, end_node)
    if failure:
        return failure

    node_ids = _astar(graph, start_id, end_id, config.iteration_factor * len(nodes))
    if node_ids is None:
        return _failure(
            PathError.SEARCH_EXHAUSTED,
            "No path found. Check if nodes are connected or if all paths are blocked.",
            start_node, end_node,
        )

    path_nodes = [graph[i].node for i in node_ids]
    coords = [n.as_lnglat() for n in path_nodes]
    return PathResult(
        path=coords,
        path_nodes=path_nodes,
        distance=round(_path_length(coords)),
        start_node=start_node,
        end_node=end_node,
    )
