"""
Service layer for the safety routing API.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import geojson
from shapely.geometry import LineString, box

from safety_routing import AppState, __version__, load_dataset_bundle
from safety_routing.algorithms.scoring.safety_scorer import SafetyScorer, score_color, score_label
from safety_routing.algorithms.scoring.time_of_day import get_time_description, resolve_hour
from safety_routing.data.models import RoadSegment, Route
from api.schemas.safety import (
    HealthResponse,
    PointOfInterestModel,
    PointScoreRequest,
    PointScoreResponse,
    RouteModel,
    RouteRequest,
    RouteResponse,
    TimeResponse,
)

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "SAFETY_ROUTING_DATA_DIR"


class SafetyRoutingService:
    """
    Service class that exposes scoring and routing to the API.

    Holds one AppState. Requests that carry their own hour are scored at that
    hour without changing the session hour; only PUT /time changes it.
    """

    def __init__(self, data_dir: Optional[str] = None):
        """Initialize the service by loading datasets."""
        self.data_dir = data_dir or os.environ.get(DATA_DIR_ENV)
        self.state = AppState()
        self.is_initialized = False

        self._initialize()

    def _initialize(self) -> None:
        try:
            logger.info("Initializing safety routing service...")
            self.state.set_datasets(load_dataset_bundle(self.data_dir, self.state.config))
            self.is_initialized = len(self.state.datasets.roads) > 0
            if self.is_initialized:
                logger.info(f"Service initialized with {len(self.state.scored_roads)} scored road segments")
            else:
                logger.warning("No road segments loaded - routing unavailable")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to initialize safety routing service: {e}")
            self.is_initialized = False

    def get_health_status(self) -> HealthResponse:
        return HealthResponse(
            status="healthy" if self.is_initialized else "degraded",
            version=__version__,
            datasets_loaded=self.is_initialized,
            dataset_counts=self.state.datasets.get_counts()
        )

    def calculate_routes(self, request: RouteRequest) -> RouteResponse:
        """
        Calculate the shortest and the safety-first route.

        Args:
            request: Route calculation request

        Returns:
            RouteResponse with zero to two routes
        """
        routes = self.state.calculate_routes(
            request.origin.to_coordinate(),
            request.destination.to_coordinate(),
            request.simulated_hour
        )

        if not routes:
            return RouteResponse(
                success=False,
                message="No route found between the requested points"
            )

        return RouteResponse(
            success=True,
            message=f"Calculated {len(routes)} route(s)",
            routes=[self._route_model(route) for route in routes],
            route_geojson=geojson.FeatureCollection([route.to_geojson() for route in routes])
        )

    @staticmethod
    def _route_model(route: Route) -> RouteModel:
        return RouteModel(
            type=route.route_type.value,
            name=route.name,
            coordinates=[[lon, lat] for lon, lat in route.coordinates],
            duration_minutes=route.duration_minutes,
            distance_meters=route.distance_meters,
            safety_score=route.safety_score,
            safety_label=score_label(route.safety_score),
            nearby_pois=[PointOfInterestModel(**poi.to_dict()) for poi in route.nearby_pois]
        )

    def score_point(self, request: PointScoreRequest) -> PointScoreResponse:
        if request.simulated_hour is None:
            hour = self.state.effective_hour
        else:
            hour = resolve_hour(request.simulated_hour)

        breakdown = self.state.score_point(request.latitude, request.longitude, hour)

        return PointScoreResponse(
            total=breakdown.total,
            crime=breakdown.crime,
            camera=breakdown.camera,
            shadow=breakdown.shadow,
            land_use=breakdown.land_use,
            color=score_color(breakdown.total),
            label=score_label(breakdown.total),
            time_description=get_time_description(hour)
        )

    def get_scored_roads_geojson(self, simulated_hour: Optional[int] = None,
                                 bbox: Optional[Sequence[float]] = None) -> Dict[str, Any]:
        """
        Scored road network as a GeoJSON FeatureCollection.

        Args:
            simulated_hour: Hour to score for; session hour when None
            bbox: Optional (min_lon, min_lat, max_lon, max_lat) viewport filter

        Returns:
            FeatureCollection of LineString features with safety properties
        """
        roads = self.state.roads_at(simulated_hour)
        if bbox is not None:
            roads = self._roads_in_bbox(roads, bbox)

        features = []
        for road in roads:
            feature = road.to_geojson()
            feature['properties']['color'] = score_color(road.safety_score)
            features.append(feature)

        return geojson.FeatureCollection(features)

    @staticmethod
    def _roads_in_bbox(roads: Sequence[RoadSegment], bbox: Sequence[float]) -> List[RoadSegment]:
        viewport = box(*bbox)
        selected = []

        for road in roads:
            if len(road.coordinates) < 2:
                continue
            if LineString(road.coordinates).intersects(viewport):
                selected.append(road)

        return selected

    def set_time(self, simulated_hour: Optional[int]) -> TimeResponse:
        """Switch the simulated hour (None for wall clock) and rescore."""
        self.state.set_hour(simulated_hour)
        hour = self.state.scored_hour

        statistics = SafetyScorer.get_scoring_statistics(self.state.scored_roads)

        return TimeResponse(
            simulated_hour=simulated_hour,
            effective_hour=hour,
            time_description=get_time_description(hour),
            scored_segments=statistics['scored_segments'],
            statistics=statistics
        )


# Global service instance
safety_service = SafetyRoutingService()
