# navigator.py
# Public entry point for the campus navigation core.
# Owns no business logic, it delegates to the specialist modules.

import logging
from typing import Any, Iterable, Mapping, Optional

from .geo_utils import haversine_distance
from .ingest import blockages_from_rows, edges_from_rows, nodes_from_rows, normalize_coords
from .models import NavigationPlan, NodeId, PathResult
from .nav_config import NavConfig
from .presentation import (
    bounds_with_padding,
    build_route_steps,
    estimate_eta,
    straight_line_path,
    to_line_feature,
)
from .route_calculator import PathRequest, find_path, find_path_between_nodes

logger = logging.getLogger(__name__)

Rows = Optional[Iterable[Mapping[str, Any]]]


class CampusNavigator:
    """
    High-level navigation facade over one data snapshot.

    Typical lifecycle:
        nav = CampusNavigator(node_rows, edge_rows, blockage_rows)
        plan = nav.plan_route([120.8103, 14.8448], building_coords)

        # Sync layer pushed new rows:
        nav.update_data(node_rows, edge_rows, blockage_rows)

    Map editor usage:
        result = nav.test_route("gate-1", "library")

    Args:
        nodes, edges, blockages: Raw rows from the realtime sync layer.
        config:                  Optional NavConfig; defaults to NavConfig().
    """

    def __init__(
        self,
        nodes: Rows = None,
        edges: Rows = None,
        blockages: Rows = None,
        config: Optional[NavConfig] = None,
    ) -> None:
        self.config = config or NavConfig()
        self.update_data(nodes, edges, blockages)

    # ------------------------------------------------------------------
    # Data snapshot
    # ------------------------------------------------------------------

    def update_data(self, nodes: Rows = None, edges: Rows = None, blockages: Rows = None) -> None:
        """Replace the snapshot. Rows are normalized here, once."""
        self._nodes = nodes_from_rows(nodes)
        self._edges = edges_from_rows(edges)
        self._blockages = blockages_from_rows(blockages)
        active = sum(1 for b in self._blockages if b.active)
        logger.info(
            f"Navigation data loaded: {len(self._nodes)} nodes, {len(self._edges)} edges, "
            f"{active}/{len(self._blockages)} active blockages."
        )

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def find_path(self, origin: Any, destination: Any, include_endpoints: bool = True) -> PathResult:
        """Raw PathResult for two coordinates; the graph is rebuilt every call."""
        request = PathRequest(
            start_coords=origin,
            end_coords=destination,
            nodes=self._nodes,
            edges=self._edges,
            blockages=self._blockages,
            include_endpoints=include_endpoints,
        )
        return find_path(request, self.config)

    def plan_route(self, origin: Any, destination: Any) -> NavigationPlan:
        """
        Calculate a route and package it for the map and guidance layers.

        When no walking route exists the plan carries the failed result, a
        straight-line preview between the two points and ``is_fallback=True``.

        Args:
            origin:      Starting coordinate ([lng, lat], mapping or Coord).
            destination: Target coordinate.

        Returns:
            NavigationPlan.
        """
        logger.info(f"Calculating route: {origin} → {destination}")
        result = self.find_path(origin, destination)

        if not result.ok:
            logger.warning(f"Route calculation failed: {result.error}")
            if normalize_coords(origin) is None or normalize_coords(destination) is None:
                return NavigationPlan(result=result, feature=to_line_feature([]), bounds=None, eta="0s")
            preview = straight_line_path(origin, destination)
            return NavigationPlan(
                result=result,
                feature=to_line_feature(preview, self.config.line_epsilon_deg),
                bounds=bounds_with_padding(preview, self.config.bounds_padding_deg),
                eta=estimate_eta(
                    haversine_distance(preview[0][1], preview[0][0], preview[1][1], preview[1][0]),
                    self.config.walking_speed_mps,
                ),
                is_fallback=True,
            )

        steps = build_route_steps(result.path_nodes, self.config)
        logger.info(f"Route ready: {result.distance} m, {len(steps)} steps.")
        return NavigationPlan(
            result=result,
            feature=to_line_feature(result.path, self.config.line_epsilon_deg),
            bounds=bounds_with_padding(result.path, self.config.bounds_padding_deg),
            eta=estimate_eta(result.distance, self.config.walking_speed_mps),
            steps=steps,
        )

    def test_route(self, start_id: NodeId, end_id: NodeId) -> PathResult:
        """Route between two exact nodes, for the map editor's test tool."""
        result = find_path_between_nodes(
            start_id, end_id, self._nodes, self._edges, self._blockages, self.config
        )
        if result.ok:
            logger.info(f"Test route {start_id} → {end_id}: {len(result.path_nodes)} nodes, {result.distance} m.")
        return result
