"""
Network-wide safety scoring of road segments from the four risk indicators.
"""

import logging
import math
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from ...config.routing_config import ScoringConfig
from ...data.models import (
    Building, CameraPoint, CrimePoint, LandUseArea, RoadSegment, SafetyScoreBreakdown
)
from .normalization import QuantileNormalizer
from .risk_indicators import camera_index, crime_index, land_use_index, nearby_buildings, shadow_index
from .time_of_day import TimeMultiplier, get_time_multiplier, resolve_hour

logger = logging.getLogger(__name__)

# (minimum score, colour, label)
SCORE_BANDS = (
    (90, '#22c55e', 'safe'),
    (80, '#84cc16', 'fairly safe'),
    (70, '#eab308', 'caution'),
    (60, '#f97316', 'warning'),
)
LOWEST_BAND = ('#ef4444', 'danger')


class RawIndicators(NamedTuple):
    """Raw indicator values at a segment midpoint, time multipliers applied."""
    road: RoadSegment
    lon: float
    lat: float
    crime: float
    camera: float
    shadow: float
    land_use: float


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SafetyScorer:
    """
    Compute a 50-100 safety score for every road segment.

    Camera coverage is not a weighted term of its own: it reduces the crime
    term by up to ``camera_crime_reduction_max``.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize safety scorer.

        Args:
            config: Scoring configuration parameters
        """
        self.config = config or ScoringConfig()
        self.config.validate()

    def raw_indicators(self, roads: Sequence[RoadSegment],
                       crimes: Sequence[CrimePoint],
                       cameras: Sequence[CameraPoint],
                       buildings: Sequence[Building],
                       land_use_areas: Sequence[LandUseArea],
                       time_multiplier: TimeMultiplier) -> List[RawIndicators]:
        """
        Evaluate the four indicators at every segment midpoint.

        Camera and shadow values are scaled by the time multiplier.
        """
        records = []

        for road in roads:
            if not road.coordinates:
                logger.debug(f"Road {road.id} has no coordinates - skipping indicators")
                continue

            lon, lat = road.midpoint
            candidates = nearby_buildings(lon, lat, buildings, self.config.building_filter_tolerance)

            records.append(RawIndicators(
                road=road,
                lon=lon,
                lat=lat,
                crime=crime_index(lat, lon, crimes, self.config.crime_bandwidth),
                camera=camera_index(lat, lon, cameras) * time_multiplier.camera_multiplier,
                shadow=shadow_index(lat, lon, candidates, self.config.building_max_distance)
                * time_multiplier.shadow_multiplier,
                land_use=land_use_index(lon, lat, land_use_areas, self.config.default_land_use_score)
            ))

        return records

    def score_roads(self, roads: Sequence[RoadSegment],
                    crimes: Sequence[CrimePoint],
                    cameras: Sequence[CameraPoint],
                    buildings: Sequence[Building],
                    land_use_areas: Sequence[LandUseArea],
                    simulated_hour: Optional[int] = None) -> List[RoadSegment]:
        """
        Score every road segment.

        Args:
            roads: Road segments to score
            crimes, cameras, buildings, land_use_areas: Indicator datasets
            simulated_hour: Hour override (0-23), wall clock when None

        Returns:
            New RoadSegment objects with ``safety_score`` populated
        """
        if not roads:
            return []

        hour = resolve_hour(simulated_hour)
        time_multiplier = get_time_multiplier(hour)

        logger.info(f"Scoring {len(roads)} road segments for hour {hour} "
                    f"(crimes={len(crimes)}, cameras={len(cameras)}, "
                    f"buildings={len(buildings)}, land_use={len(land_use_areas)})")

        records = self.raw_indicators(roads, crimes, cameras, buildings, land_use_areas, time_multiplier)
        if not records:
            return []

        # Normalization needs every segment's raw values first
        crime_raw = np.array([r.crime for r in records])
        camera_raw = np.array([r.camera for r in records])
        shadow_raw = np.array([r.shadow for r in records])
        land_use = np.array([r.land_use for r in records])

        crime_norm = self._normalizer(crime_raw).normalize_array(crime_raw)
        camera_norm = self._normalizer(camera_raw).normalize_array(camera_raw)
        shadow_norm = self._normalizer(shadow_raw).normalize_array(shadow_raw)

        final_scores = self._blend(crime_norm, camera_norm, shadow_norm, land_use, time_multiplier)

        scored = [record.road.with_score(int(score)) for record, score in zip(records, final_scores)]

        logger.info(f"Scored {len(scored)} segments: {self.get_scoring_statistics(scored)}")
        return scored

    def _normalizer(self, values: np.ndarray) -> QuantileNormalizer:
        return QuantileNormalizer(values, self.config.quantile_low, self.config.quantile_high)

    def _blend(self, crime_norm: np.ndarray, camera_norm: np.ndarray,
               shadow_norm: np.ndarray, land_use_norm: np.ndarray,
               time_multiplier: TimeMultiplier) -> np.ndarray:
        """Blend normalized indicators into integer scores in [floor, ceiling]."""
        camera_protection = camera_norm * self.config.camera_crime_reduction_max
        effective_crime_risk = crime_norm * (1 - camera_protection)

        raw_safety = 100 * (
            self.config.crime_weight * (1 - effective_crime_risk) +
            self.config.shadow_weight * (1 - shadow_norm) +
            self.config.land_use_weight * land_use_norm
        )

        adjusted = raw_safety * time_multiplier.overall

        floor = self.config.score_floor
        span = self.config.score_ceiling - self.config.score_floor
        final = np.clip(floor + (adjusted / 100) * span, floor, self.config.score_ceiling)

        return np.floor(final + 0.5).astype(int)

    def score_point(self, lat: float, lon: float,
                    crimes: Sequence[CrimePoint],
                    cameras: Sequence[CameraPoint],
                    buildings: Sequence[Building],
                    land_use_areas: Sequence[LandUseArea],
                    simulated_hour: Optional[int] = None) -> SafetyScoreBreakdown:
        """
        Detailed safety breakdown at a single point.

        There is no network distribution to normalize against, so each raw
        value is divided by a fixed scale and capped at 1. The result is an
        approximation for probing and is not expected to match segment scores.
        """
        time_multiplier = get_time_multiplier(resolve_hour(simulated_hour))
        candidates = nearby_buildings(lon, lat, buildings, self.config.building_filter_tolerance)

        crime_raw = crime_index(lat, lon, crimes, self.config.crime_bandwidth)
        camera_raw = camera_index(lat, lon, cameras) * time_multiplier.camera_multiplier
        shadow_raw = (shadow_index(lat, lon, candidates, self.config.building_max_distance)
                      * time_multiplier.shadow_multiplier)
        land_use_norm = land_use_index(lon, lat, land_use_areas, self.config.default_land_use_score)

        crime_norm = min(1.0, crime_raw / self.config.point_crime_scale)
        camera_norm = min(1.0, camera_raw / self.config.point_camera_scale)
        shadow_norm = min(1.0, shadow_raw / self.config.point_shadow_scale)

        camera_protection = camera_norm * self.config.camera_crime_reduction_max
        effective_crime_risk = crime_norm * (1 - camera_protection)

        total = (
            self.config.crime_weight * (1 - effective_crime_risk) +
            self.config.shadow_weight * (1 - shadow_norm) +
            self.config.land_use_weight * land_use_norm
        ) * 100 * time_multiplier.overall

        return SafetyScoreBreakdown(
            total=round_half_up(max(0.0, min(100.0, total))),
            crime=round_half_up(100 * (1 - effective_crime_risk)),
            camera=round_half_up(100 * camera_norm),
            shadow=round_half_up(100 * (1 - shadow_norm)),
            land_use=round_half_up(100 * land_use_norm)
        )

    @staticmethod
    def get_scoring_statistics(roads: Sequence[RoadSegment]) -> Dict[str, Any]:
        """Summary statistics of the scores attached to a set of roads."""
        scores = [r.safety_score for r in roads if r.safety_score is not None]

        return {
            'scored_segments': len(scores),
            'mean': round(float(np.mean(scores)), 2) if scores else None,
            'std': round(float(np.std(scores)), 2) if scores else None,
            'min': int(np.min(scores)) if scores else None,
            'max': int(np.max(scores)) if scores else None
        }


def score_color(score: float) -> str:
    """Display colour for a safety score."""
    for minimum, color, _ in SCORE_BANDS:
        if score >= minimum:
            return color
    return LOWEST_BAND[0]


def score_label(score: float) -> str:
    """Display label for a safety score."""
    for minimum, _, label in SCORE_BANDS:
        if score >= minimum:
            return label
    return LOWEST_BAND[1]
