"""
Explicit application state shared between the service layer and the core.

The scoring and routing functions never read this object; callers pass its
fields into them. Scores are recomputed in one pass whenever the effective
hour or a dataset changes, before any route request reads them. In wall-clock
mode the effective hour is checked on every read, so a long-running session
follows the clock.
"""

import logging
from typing import List, Optional

from .algorithms.optimization.route_planner import RoutePlanner
from .algorithms.scoring.safety_scorer import SafetyScorer
from .algorithms.scoring.time_of_day import resolve_hour
from .config.routing_config import ScoringConfig
from .data.data_loader import DatasetBundle
from .data.distance_utils import Coordinate
from .data.models import RoadSegment, Route, SafetyScoreBreakdown

logger = logging.getLogger(__name__)


class AppState:
    """Datasets, simulated hour and the scored road network for one session."""

    def __init__(self, datasets: Optional[DatasetBundle] = None,
                 simulated_hour: Optional[int] = None,
                 config: Optional[ScoringConfig] = None):
        resolve_hour(simulated_hour)

        self.config = config or ScoringConfig()
        self.datasets = datasets or DatasetBundle()
        self.simulated_hour = simulated_hour
        self.scorer = SafetyScorer(self.config)
        self.planner = RoutePlanner(self.config)
        self.scored_roads: List[RoadSegment] = []
        self.scored_hour: Optional[int] = None

        self.rescore()

    @property
    def effective_hour(self) -> int:
        return resolve_hour(self.simulated_hour)

    def rescore(self) -> List[RoadSegment]:
        """Recompute every road segment score for the effective hour."""
        hour = self.effective_hour
        self.scored_roads = self._score_roads(hour)
        self.scored_hour = hour
        return self.scored_roads

    def _score_roads(self, hour: int) -> List[RoadSegment]:
        return self.scorer.score_roads(
            self.datasets.roads,
            self.datasets.crimes,
            self.datasets.cameras,
            self.datasets.buildings,
            self.datasets.land_use_areas,
            hour
        )

    def current_roads(self) -> List[RoadSegment]:
        """Scored roads for the effective hour, rescoring if the clock moved on."""
        if self.effective_hour != self.scored_hour:
            logger.info(f"Effective hour moved from {self.scored_hour} to {self.effective_hour} - rescoring")
            self.rescore()
        return self.scored_roads

    def roads_at(self, simulated_hour: Optional[int] = None) -> List[RoadSegment]:
        """
        Scored roads for a one-off hour without changing the session hour.

        Args:
            simulated_hour: Hour to score for (0-23), session hour when None

        Returns:
            The cached scores when the hour matches them, else a fresh scoring
        """
        if simulated_hour is None:
            return self.current_roads()

        hour = resolve_hour(simulated_hour)
        if hour == self.scored_hour:
            return self.scored_roads
        return self._score_roads(hour)

    def set_hour(self, simulated_hour: Optional[int]) -> None:
        """Change the simulated hour (None for wall clock) and rescore."""
        resolve_hour(simulated_hour)

        logger.info(f"Simulated hour changed from {self.simulated_hour} to {simulated_hour}")
        self.simulated_hour = simulated_hour
        self.rescore()

    def set_datasets(self, datasets: DatasetBundle) -> None:
        """Replace the input collections and rescore."""
        self.datasets = datasets
        self.rescore()

    def calculate_routes(self, origin: Coordinate, destination: Coordinate,
                         simulated_hour: Optional[int] = None) -> List[Route]:
        roads = self.roads_at(simulated_hour)
        return self.planner.calculate_routes(origin, destination, roads, self.datasets.pois)

    def score_point(self, lat: float, lon: float,
                    simulated_hour: Optional[int] = None) -> SafetyScoreBreakdown:
        hour = self.effective_hour if simulated_hour is None else simulated_hour
        return self.scorer.score_point(
            lat, lon,
            self.datasets.crimes,
            self.datasets.cameras,
            self.datasets.buildings,
            self.datasets.land_use_areas,
            hour
        )
