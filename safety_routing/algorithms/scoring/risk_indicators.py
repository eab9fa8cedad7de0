"""
Raw risk indicators evaluated at a single coordinate.

Crime and shadow grow with danger, camera and land use grow with safety.
Each function is independent of the others and of the network.
"""

import math
from typing import List, Sequence

from ...data.distance_utils import haversine_distance, point_in_polygon
from ...data.models import Building, CameraPoint, CrimePoint, LandUseArea

CRIME_BANDWIDTH = 150.0  # meters
BUILDING_MAX_DISTANCE = 50.0  # meters
BUILDING_REFERENCE_HEIGHT = 30.0  # meters
BUILDING_FILTER_TOLERANCE = 0.001  # degrees
DEFAULT_LAND_USE_SCORE = 0.5


def crime_index(lat: float, lon: float, crimes: Sequence[CrimePoint],
                bandwidth: float = CRIME_BANDWIDTH) -> float:
    """
    Gaussian kernel density of weighted crimes around a point.

    Args:
        lat, lon: Evaluation point
        crimes: Crime incidents
        bandwidth: Kernel bandwidth in meters

    Returns:
        Crime index (higher = more dangerous)
    """
    two_h_squared = 2 * bandwidth * bandwidth
    index = 0.0

    for crime in crimes:
        d = haversine_distance(lat, lon, crime.lat, crime.lon)
        index += crime.weight * math.exp(-(d * d) / two_h_squared)

    return index


def camera_index(lat: float, lon: float, cameras: Sequence[CameraPoint]) -> float:
    """
    Exponentially decayed camera coverage, cut off at each camera's radius.

    Args:
        lat, lon: Evaluation point
        cameras: Cameras with their own effective radius and decay constant

    Returns:
        Camera index (higher = safer)
    """
    index = 0.0

    for camera in cameras:
        d = haversine_distance(lat, lon, camera.lat, camera.lon)
        if d <= camera.effective_radius:
            index += math.exp(-d / camera.decay_constant)

    return index


def shadow_index(lat: float, lon: float, buildings: Sequence[Building],
                 max_distance: float = BUILDING_MAX_DISTANCE) -> float:
    """
    Sightline obstruction from nearby buildings.

    Taller and closer buildings contribute more; buildings whose centroid is
    further than ``max_distance`` contribute nothing.

    Returns:
        Shadow index (higher = more dangerous)
    """
    index = 0.0

    for building in buildings:
        centroid = building.centroid
        if centroid is None:
            continue

        d = haversine_distance(lat, lon, centroid[1], centroid[0])
        if d <= max_distance:
            index += (building.height / BUILDING_REFERENCE_HEIGHT) * (1 - d / max_distance)

    return index


def land_use_index(lon: float, lat: float, land_use_areas: Sequence[LandUseArea],
                   default: float = DEFAULT_LAND_USE_SCORE) -> float:
    """
    Safety score of the first land-use polygon containing the point.

    Polygons are assumed not to overlap; with overlaps, iteration order decides.

    Returns:
        Land-use index in [0, 1] (higher = safer)
    """
    point = (lon, lat)

    for area in land_use_areas:
        if point_in_polygon(point, area.polygon):
            return area.safety_score

    return default


def nearby_buildings(lon: float, lat: float, buildings: Sequence[Building],
                     tolerance: float = BUILDING_FILTER_TOLERANCE) -> List[Building]:
    """
    Cheap pre-filter: buildings whose centroid is within ``tolerance`` degrees
    of the point on both axes.
    """
    nearby = []

    for building in buildings:
        centroid = building.centroid
        if centroid is None:
            continue
        if abs(centroid[0] - lon) < tolerance and abs(centroid[1] - lat) < tolerance:
            nearby.append(building)

    return nearby
