"""
Pydantic schemas for the safety routing API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LocationRequest(BaseModel):
    """Request model for a single location."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")

    def to_coordinate(self):
        """(lon, lat) tuple in GeoJSON order."""
        return (self.longitude, self.latitude)


class RouteRequest(BaseModel):
    """Request model for route calculation."""
    origin: LocationRequest = Field(..., description="Starting location")
    destination: LocationRequest = Field(..., description="Destination location")
    simulated_hour: Optional[int] = Field(default=None, ge=0, le=23,
                                          description="Hour to score this request for (session hour when omitted)")


class PointOfInterestModel(BaseModel):
    """A point of interest near a route."""
    id: str
    type: str
    name: str
    lat: float
    lon: float
    is_24h: bool = False


class RouteModel(BaseModel):
    """A calculated route."""
    type: str = Field(..., description="'fastest' or 'recommended'")
    name: str = Field(..., description="Display name")
    coordinates: List[List[float]] = Field(..., description="Route polyline as [lon, lat] pairs")
    duration_minutes: int = Field(..., description="Walking time at 4 km/h")
    distance_meters: int = Field(..., description="Route length in meters")
    safety_score: int = Field(..., ge=0, le=100, description="Average safety score of traversed edges")
    safety_label: str = Field(..., description="Display label for the safety score")
    nearby_pois: List[PointOfInterestModel] = Field(default_factory=list)


class RouteResponse(BaseModel):
    """Response model for route calculation."""
    success: bool = Field(..., description="Whether at least one route was found")
    message: str = Field(..., description="Status message")
    routes: List[RouteModel] = Field(default_factory=list, description="Zero to two routes")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Routes as GeoJSON FeatureCollection")


class PointScoreRequest(BaseModel):
    """Request model for a single-point safety breakdown."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    simulated_hour: Optional[int] = Field(default=None, ge=0, le=23)


class PointScoreResponse(BaseModel):
    """Single-point safety breakdown."""
    total: int = Field(..., ge=0, le=100)
    crime: int = Field(..., ge=0, le=100)
    camera: int = Field(..., ge=0, le=100)
    shadow: int = Field(..., ge=0, le=100)
    land_use: int = Field(..., ge=0, le=100)
    color: str = Field(..., description="Display colour for the total score")
    label: str = Field(..., description="Display label for the total score")
    time_description: str = Field(..., description="Lighting conditions at the scored hour")


class TimeRequest(BaseModel):
    """Request model for changing the simulated hour."""
    simulated_hour: Optional[int] = Field(default=None, ge=0, le=23,
                                          description="Hour to simulate, null for wall clock")


class TimeResponse(BaseModel):
    """Scoring state after a time change."""
    simulated_hour: Optional[int]
    effective_hour: int
    time_description: str
    scored_segments: int
    statistics: Dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    datasets_loaded: bool = Field(..., description="Whether road data is loaded")
    dataset_counts: Dict[str, int] = Field(..., description="Number of records per dataset")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
