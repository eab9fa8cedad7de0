"""
Route planner producing the shortest and the safety-first route for a request.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ...config.routing_config import ScoringConfig
from ...data.distance_utils import Coordinate, haversine_distance
from ...data.models import PointOfInterest, RoadSegment, Route, RouteType
from ...mapping.graph_builder import build_routing_graph, find_nearest_node, get_graph_statistics
from ..routing.path_solver import CostMode, DualObjectivePathSolver, PathResult
from ..scoring.safety_scorer import round_half_up

logger = logging.getLogger(__name__)

ROUTE_NAMES = {
    RouteType.FASTEST: "Shortest route",
    RouteType.RECOMMENDED: "Safety-first route"
}

OBJECTIVES = (
    (RouteType.FASTEST, CostMode.DISTANCE),
    (RouteType.RECOMMENDED, CostMode.SAFETY)
)


class RoutePlanner:
    """
    Build routes between two coordinates over freshly built graphs.

    The graph is rebuilt for every request so it always reflects the current
    segment scores.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize route planner.

        Args:
            config: Routing configuration parameters
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        self.last_metadata: Dict[str, Any] = {}

    def calculate_routes(self, origin: Coordinate, destination: Coordinate,
                         roads: Sequence[RoadSegment],
                         pois: Sequence[PointOfInterest] = ()) -> List[Route]:
        """
        Calculate the shortest and the safety-first route.

        Args:
            origin: (lon, lat) of the route start
            destination: (lon, lat) of the route end
            roads: Scored road segments
            pois: Points of interest for route annotation

        Returns:
            Zero to two routes; an objective without a path is omitted
        """
        routes: List[Route] = []
        self.last_metadata = {}

        graph = build_routing_graph(roads, self.config.node_precision, self.config.default_edge_safety)

        if graph.number_of_nodes() == 0:
            logger.warning("No roads available for routing")
            return routes

        start = find_nearest_node(graph, origin[0], origin[1])
        end = find_nearest_node(graph, destination[0], destination[1])

        start_node, start_distance = start
        end_node, end_distance = end

        self.last_metadata = {
            'start_node': start_node,
            'end_node': end_node,
            'start_snap_distance_m': round(start_distance, 1),
            'end_snap_distance_m': round(end_distance, 1),
            'graph_stats': get_graph_statistics(graph)
        }

        threshold = self.config.disconnect_threshold
        if start_distance > threshold or end_distance > threshold:
            logger.warning(f"Start or end point is far from the road network "
                           f"(start {start_distance:.0f}m, end {end_distance:.0f}m)")
            if self.config.reject_disconnected:
                return routes

        nearby_pois = self.find_nearby_pois(origin, destination, pois)

        solver = DualObjectivePathSolver(graph, self.config)

        for route_type, mode in OBJECTIVES:
            path = solver.find_path(start_node, end_node, mode)
            if path is None:
                logger.warning(f"Omitting {route_type.value} route - no path found")
                continue
            routes.append(self._build_route(route_type, path, origin, destination, nearby_pois))

        logger.info(f"Calculated {len(routes)} routes from {origin} to {destination}")
        return routes

    def _build_route(self, route_type: RouteType, path: PathResult,
                     origin: Coordinate, destination: Coordinate,
                     nearby_pois: List[PointOfInterest]) -> Route:
        """Bridge the exact endpoints onto the path and derive route metrics."""
        coordinates = [tuple(origin)] + path.coordinates() + [tuple(destination)]

        return Route(
            route_type=route_type,
            name=ROUTE_NAMES[route_type],
            coordinates=coordinates,
            duration_minutes=self.duration_minutes(path.total_distance),
            distance_meters=round_half_up(path.total_distance),
            safety_score=round_half_up(path.average_safety_score),
            nearby_pois=list(nearby_pois)
        )

    def duration_minutes(self, distance_m: float) -> int:
        """Walking time in whole minutes at the configured speed."""
        return round_half_up(distance_m / 1000 / self.config.walking_speed_kmh * 60)

    def find_nearby_pois(self, origin: Coordinate, destination: Coordinate,
                         pois: Sequence[PointOfInterest]) -> List[PointOfInterest]:
        """
        Points of interest near the midpoint of origin and destination.

        The midpoint is that of the two request endpoints, not of a path.
        """
        mid_lon = (origin[0] + destination[0]) / 2
        mid_lat = (origin[1] + destination[1]) / 2

        nearby = [
            poi for poi in pois
            if haversine_distance(mid_lat, mid_lon, poi.lat, poi.lon) < self.config.poi_search_radius
        ]
        return nearby[:self.config.max_nearby_pois]
