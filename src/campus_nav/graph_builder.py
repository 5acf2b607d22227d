# graph_builder.py
# Builds the in-memory routing graph for a single route request.
# Depends only on: geo_utils, models, nav_config.

import logging
from typing import Iterable, List, Optional, Sequence

from .geo_utils import haversine_distance, point_in_polygon
from .models import Blockage, Edge, Graph, GraphNode, Neighbor, Node
from .nav_config import BLOCKAGE_SAMPLES

logger = logging.getLogger(__name__)


def is_edge_blocked(
    from_node: Node,
    to_node: Node,
    active_blockages: Sequence[Blockage],
    samples: Sequence[float] = BLOCKAGE_SAMPLES,
) -> bool:
    """
    True if any sample point along the straight segment falls inside a blockage.

    Args:
        from_node, to_node: Edge endpoints.
        active_blockages:   Blockages already filtered to active ones.
        samples:            Fractions of the segment to test (0 = from, 1 = to).
    """
    polygons = [b.points for b in active_blockages if len(b.points) >= 3]
    if not polygons:
        return False

    for t in samples:
        lng = from_node.lon + t * (to_node.lon - from_node.lon)
        lat = from_node.lat + t * (to_node.lat - from_node.lat)
        if any(point_in_polygon(lng, lat, polygon) for polygon in polygons):
            return True
    return False


def build_graph(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
    blockages: Optional[Iterable[Blockage]] = None,
    samples: Sequence[float] = BLOCKAGE_SAMPLES,
) -> Graph:
    """
    Adjacency-list graph with one entry per node.

    Edges pointing at unknown nodes are dropped, edges crossing an active
    blockage are left out entirely, every other edge is inserted in both
    directions with the same cost.

    Args:
        nodes:     Node list.
        edges:     Canonical edges (see ingest.edge_from_row).
        blockages: Optional blockage polygons; inactive ones are ignored.
        samples:   Fractions along each edge tested against blockages.

    Returns:
        Mapping of node id -> GraphNode. Caller inputs are not modified.
    """
    graph: Graph = {node.id: GraphNode(node=node) for node in nodes}
    active: List[Blockage] = [b for b in (blockages or ()) if b.active]

    dropped = 0
    blocked = 0
    for edge in edges:
        src = graph.get(edge.from_id)
        dst = graph.get(edge.to_id)
        if src is None or dst is None:
            dropped += 1
            continue

        if active and is_edge_blocked(src.node, dst.node, active, samples):
            blocked += 1
            continue

        # Missing, zero or negative weights fall back to the geographic distance
        cost = edge.weight if edge.weight is not None and edge.weight > 0 else haversine_distance(
            src.node.lat, src.node.lon, dst.node.lat, dst.node.lon
        )
        src.neighbors.append(Neighbor(node_id=edge.to_id, cost=cost))
        dst.neighbors.append(Neighbor(node_id=edge.from_id, cost=cost))

    if dropped or blocked:
        logger.debug(f"Graph build skipped {dropped} dangling and {blocked} blocked edge(s).")
    return graph


def connected_node_count(graph: Graph) -> int:
    """Number of graph entries with at least one neighbour."""
    return sum(1 for entry in graph.values() if entry.is_connected)

