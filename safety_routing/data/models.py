"""
Data model for scoring inputs, routing graph edges and computed routes.

Coordinates are (lon, lat) tuples in WGS84 degrees, the GeoJSON order.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

import geojson

from .distance_utils import Coordinate, polygon_centroid

MIN_BUILDING_HEIGHT = 3.0


@dataclass(frozen=True)
class CrimePoint:
    """A geocoded incident with a pre-assigned severity weight."""
    lon: float
    lat: float
    crime_type: str = ""
    weight: int = 1
    id: str = ""


@dataclass(frozen=True)
class CameraPoint:
    """A security camera with a hard effective radius and exponential decay."""
    lon: float
    lat: float
    effective_radius: float = 80.0  # meters
    decay_constant: float = 30.0    # meters
    id: str = ""


@dataclass(frozen=True)
class LandUseArea:
    """A land-use polygon with a precomputed safety score in [0, 1]."""
    id: str
    polygon: List[Coordinate]
    safety_score: float
    code: str = "231"
    name: str = ""


@dataclass(frozen=True)
class Building:
    """A building footprint with height used for the shadow indicator."""
    id: str
    polygon: List[Coordinate]
    height: float = 5.0
    storeys: int = 1
    usage: str = "other"

    def __post_init__(self):
        if self.height < MIN_BUILDING_HEIGHT:
            object.__setattr__(self, 'height', MIN_BUILDING_HEIGHT)

    @property
    def centroid(self) -> Optional[Coordinate]:
        return polygon_centroid(self.polygon)


@dataclass
class RoadSegment:
    """
    A pedestrian road polyline.

    ``safety_score`` is None until the scorer attaches an integer in [50, 100].
    """
    id: str
    highway: str
    coordinates: List[Coordinate]
    name: str = ""
    safety_score: Optional[int] = None

    @property
    def midpoint(self) -> Coordinate:
        """The polyline vertex at index floor(n / 2)."""
        return self.coordinates[len(self.coordinates) // 2]

    def with_score(self, score: int) -> 'RoadSegment':
        return replace(self, coordinates=list(self.coordinates), safety_score=score)

    def to_geojson(self) -> geojson.Feature:
        return geojson.Feature(
            geometry=geojson.LineString([list(c) for c in self.coordinates]),
            properties={
                "id": self.id,
                "highway": self.highway,
                "name": self.name,
                "safety_score": self.safety_score
            }
        )


@dataclass(frozen=True)
class PointOfInterest:
    """A point of interest used to annotate routes."""
    id: str
    poi_type: str
    name: str
    lon: float
    lat: float
    is_24h: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.poi_type,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "is_24h": self.is_24h
        }


@dataclass(frozen=True)
class Edge:
    """A directed routing graph edge with the score baked in at build time."""
    target: str
    length: float
    safety_score: float
    start: Coordinate
    end: Coordinate


class RouteType(Enum):
    """Objective a route was optimised for."""
    FASTEST = "fastest"
    RECOMMENDED = "recommended"


@dataclass
class Route:
    """A candidate route returned to the caller."""
    route_type: RouteType
    name: str
    coordinates: List[Coordinate]
    duration_minutes: int
    distance_meters: int
    safety_score: int
    nearby_pois: List[PointOfInterest] = field(default_factory=list)

    def to_geojson(self) -> geojson.Feature:
        return geojson.Feature(
            geometry=geojson.LineString([list(c) for c in self.coordinates]),
            properties={
                "type": self.route_type.value,
                "name": self.name,
                "duration_minutes": self.duration_minutes,
                "distance_meters": self.distance_meters,
                "safety_score": self.safety_score,
                "nearby_pois": [poi.to_dict() for poi in self.nearby_pois]
            }
        )


@dataclass(frozen=True)
class SafetyScoreBreakdown:
    """Single-point diagnostic score, all components are integers in [0, 100]."""
    total: int
    crime: int
    camera: int
    shadow: int
    land_use: int
