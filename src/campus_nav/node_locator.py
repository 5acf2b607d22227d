# node_locator.py
# Snaps raw GPS positions onto graph nodes.
# A fix rarely lands on a node, and the literally nearest one may be isolated,
# so each finder relaxes "nearest" a bit further towards "nearest usable".

from typing import List, Optional, Sequence, Tuple

from .geo_utils import haversine_distance
from .models import Graph, Node, NodeId
from .reachability import can_reach


def _by_distance(lng: float, lat: float, nodes: Sequence[Node]) -> List[Tuple[float, Node]]:
    ranked = [(haversine_distance(lat, lng, n.lat, n.lon), n) for n in nodes]
    ranked.sort(key=lambda pair: pair[0])
    return ranked


def find_nearest_node(lng: float, lat: float, nodes: Sequence[Node]) -> Optional[Node]:
    """Closest node by great-circle distance, or None for an empty list."""
    best_node = None
    min_dist = float("inf")
    for node in nodes:
        d = haversine_distance(lat, lng, node.lat, node.lon)
        if d < min_dist:
            min_dist = d
            best_node = node
    return best_node


def find_nearest_connected_node(
    lng: float,
    lat: float,
    nodes: Sequence[Node],
    graph: Graph,
    max_candidates: int = 10,
) -> Optional[Node]:
    """
    Nearest node that has at least one neighbour in the graph.

    Only the ``max_candidates`` closest nodes are considered. If none of them
    is connected the plain nearest node is returned anyway.
    """
    if not nodes:
        return None

    ranked = _by_distance(lng, lat, nodes)
    for _, candidate in ranked[:max_candidates]:
        entry = graph.get(candidate.id)
        if entry is not None and entry.is_connected:
            return candidate
    return ranked[0][1]


def find_nearest_reachable_node(
    lng: float,
    lat: float,
    target_id: NodeId,
    nodes: Sequence[Node],
    graph: Graph,
    max_candidates: int = 20,
) -> Optional[Node]:
    """
    Nearest connected node from which target_id can be reached.

    Falls back to find_nearest_connected_node when none of the
    ``max_candidates`` closest nodes qualifies.
    """
    if not nodes:
        return None

    for _, candidate in _by_distance(lng, lat, nodes)[:max_candidates]:
        entry = graph.get(candidate.id)
        if entry is None or not entry.is_connected:
            continue
        if can_reach(candidate.id, target_id, graph):
            return candidate
    return find_nearest_connected_node(lng, lat, nodes, graph, max_candidates)
