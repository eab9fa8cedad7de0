"""
Distance and geometry utilities for coordinate-based scoring and routing.
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np

EARTH_RADIUS_M = 6371000

Coordinate = Tuple[float, float]  # (lon, lat)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in meters
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distances(lat: float, lon: float,
                        lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """
    Vectorised haversine distance from one point to many.

    Args:
        lat, lon: Query point
        lats, lons: Arrays of target coordinates

    Returns:
        Array of distances in meters
    """
    lat_rad = np.radians(lat)
    lats_rad = np.radians(lats)
    delta_lat = np.radians(lats - lat)
    delta_lon = np.radians(lons - lon)

    a = (np.sin(delta_lat / 2) ** 2 +
         np.cos(lat_rad) * np.cos(lats_rad) * np.sin(delta_lon / 2) ** 2)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great circle distance in meters between two (lon, lat) coordinates."""
    return haversine_distance(a[1], a[0], b[1], b[0])


def polyline_length(coordinates: Sequence[Coordinate]) -> float:
    """Total length in meters of a (lon, lat) polyline."""
    total_length = 0.0

    for i in range(len(coordinates) - 1):
        total_length += distance(coordinates[i], coordinates[i + 1])

    return total_length


def point_in_polygon(point: Coordinate, polygon: Sequence[Coordinate]) -> bool:
    """
    Even-odd ray casting test.

    Closure is implied, the polygon's last vertex connects back to the first.

    Args:
        point: (lon, lat) to test
        polygon: Ordered (lon, lat) vertices

    Returns:
        True if the horizontal ray from the point crosses an odd number of edges
    """
    x, y = point
    inside = False

    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i][0], polygon[i][1]
        xj, yj = polygon[j][0], polygon[j][1]

        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i

    return inside


def polygon_centroid(polygon: Sequence[Coordinate]) -> Optional[Coordinate]:
    """Vertex-average centre of a polygon, None when it has no vertices."""
    if not polygon:
        return None

    center_lon = sum(p[0] for p in polygon) / len(polygon)
    center_lat = sum(p[1] for p in polygon) / len(polygon)
    return (center_lon, center_lat)


def coordinate_key(coordinate: Coordinate, precision: int = 4) -> str:
    """
    Quantize a coordinate into a graph node key.

    At 4 decimals (~10m) polyline endpoints that describe the same junction
    collapse onto one node.
    """
    return f"{coordinate[0]:.{precision}f},{coordinate[1]:.{precision}f}"


def parse_coordinate_key(key: str) -> Coordinate:
    """Inverse of coordinate_key, returns the quantized (lon, lat)."""
    lon, lat = key.split(',')
    return (float(lon), float(lat))
