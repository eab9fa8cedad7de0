"""
Configuration management for safety scoring and safety-aware routing parameters.
"""

from dataclasses import dataclass


@dataclass
class ScoringConfig:
    """Configuration parameters for safety scoring and dual-objective routing."""

    # Risk Indicator Parameters
    crime_bandwidth: float = 150.0  # meters - Gaussian KDE bandwidth for crime density
    camera_effective_radius: float = 80.0  # meters - default camera cutoff radius
    camera_decay_constant: float = 30.0  # meters - default camera decay sigma
    building_max_distance: float = 50.0  # meters - max centroid distance for shadow influence
    building_filter_tolerance: float = 0.001  # degrees - bounding pre-filter around midpoints
    default_land_use_score: float = 0.5  # score when no land-use polygon contains the point

    # Normalization
    quantile_low: float = 0.05
    quantile_high: float = 0.95

    # Blend Weights (camera is folded into the crime term)
    crime_weight: float = 0.50
    shadow_weight: float = 0.20
    land_use_weight: float = 0.30
    camera_crime_reduction_max: float = 0.5  # cameras reduce crime risk by at most 50%

    # Public Score Range
    score_floor: int = 50
    score_ceiling: int = 100

    # Single-point breakdown denominators (no network distribution available)
    point_crime_scale: float = 10.0
    point_camera_scale: float = 3.0
    point_shadow_scale: float = 5.0

    # Graph Construction
    node_precision: int = 4  # decimal degrees for node keys (~10m)
    default_edge_safety: float = 70.0  # score for unscored segments and empty paths

    # Routing Behavior
    safety_cost_weight: float = 10.0  # meters of detour per safety point below 100
    walking_speed_kmh: float = 4.0
    disconnect_threshold: float = 500.0  # meters - nearest node further than this is off-network
    reject_disconnected: bool = False  # drop routes instead of only warning

    # Route Annotation
    poi_search_radius: float = 500.0  # meters around the origin/destination midpoint
    max_nearby_pois: int = 5

    def validate(self) -> None:
        """Validate configuration parameters."""
        if abs(self.crime_weight + self.shadow_weight + self.land_use_weight - 1.0) > 1e-6:
            raise ValueError("crime_weight + shadow_weight + land_use_weight must equal 1.0")
        if not 0 <= self.quantile_low < self.quantile_high <= 1:
            raise ValueError("quantiles must satisfy 0 <= quantile_low < quantile_high <= 1")
        if self.crime_bandwidth <= 0:
            raise ValueError("crime_bandwidth must be positive")
        if self.building_max_distance <= 0:
            raise ValueError("building_max_distance must be positive")
        if not 0 <= self.camera_crime_reduction_max <= 1:
            raise ValueError("camera_crime_reduction_max must be between 0 and 1")
        if self.score_floor > self.score_ceiling:
            raise ValueError("score_floor must not exceed score_ceiling")
        if self.safety_cost_weight < 0:
            raise ValueError("safety_cost_weight must be non-negative")
        if self.walking_speed_kmh <= 0:
            raise ValueError("walking_speed_kmh must be positive")
        if self.node_precision < 0:
            raise ValueError("node_precision must be non-negative")

    @classmethod
    def create_default_config(cls) -> 'ScoringConfig':
        """Create the default configuration."""
        return cls()

    @classmethod
    def create_cautious_config(cls) -> 'ScoringConfig':
        """
        Create configuration that trades more distance for safety.

        Each safety point below 100 costs as much as 20 extra meters, so the
        recommended route accepts longer detours around low-scoring streets.
        """
        return cls(
            safety_cost_weight=20.0,
            reject_disconnected=True
        )

    @classmethod
    def create_direct_config(cls) -> 'ScoringConfig':
        """Create configuration whose recommended route stays close to the shortest one."""
        return cls(
            safety_cost_weight=5.0
        )
