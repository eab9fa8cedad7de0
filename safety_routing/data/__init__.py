"""
Data model, geometry utilities and dataset loading.

This module contains:
- Typed records for crimes, cameras, buildings, land use, roads and routes
- Distance and point-in-polygon calculations
- Loaders for the canonical GeoJSON datasets
"""

from .distance_utils import (
    haversine_distance,
    distance,
    point_in_polygon,
    polygon_centroid,
    coordinate_key,
    parse_coordinate_key,
    polyline_length
)
from .models import (
    CrimePoint,
    CameraPoint,
    LandUseArea,
    Building,
    RoadSegment,
    PointOfInterest,
    Edge,
    Route,
    RouteType,
    SafetyScoreBreakdown
)
from .data_loader import DatasetBundle, load_dataset_bundle

__all__ = [
    'haversine_distance',
    'distance',
    'point_in_polygon',
    'polygon_centroid',
    'coordinate_key',
    'parse_coordinate_key',
    'polyline_length',
    'CrimePoint',
    'CameraPoint',
    'LandUseArea',
    'Building',
    'RoadSegment',
    'PointOfInterest',
    'Edge',
    'Route',
    'RouteType',
    'SafetyScoreBreakdown',
    'DatasetBundle',
    'load_dataset_bundle'
]
