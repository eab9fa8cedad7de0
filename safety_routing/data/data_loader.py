"""
Loaders for the canonical scoring datasets.

Each dataset is a JSON file emitted by the ingestion scripts: GeoJSON
FeatureCollections for roads, buildings and land use, and either a
FeatureCollection of points or a plain list of records for crimes, cameras
and points of interest.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..config.category_tables import building_usage, crime_weight, land_use_category
from ..config.routing_config import ScoringConfig
from .models import Building, CameraPoint, CrimePoint, LandUseArea, PointOfInterest, RoadSegment

logger = logging.getLogger(__name__)

DATASET_FILES = {
    'crimes': 'crimes.json',
    'cameras': 'cameras.json',
    'buildings': 'buildings.json',
    'land_use': 'landuse.json',
    'roads': 'roads.json',
    'pois': 'pois.json'
}


@dataclass
class DatasetBundle:
    """The five scoring collections plus points of interest."""
    crimes: List[CrimePoint] = field(default_factory=list)
    cameras: List[CameraPoint] = field(default_factory=list)
    buildings: List[Building] = field(default_factory=list)
    land_use_areas: List[LandUseArea] = field(default_factory=list)
    roads: List[RoadSegment] = field(default_factory=list)
    pois: List[PointOfInterest] = field(default_factory=list)

    def get_counts(self) -> Dict[str, int]:
        return {
            'crimes': len(self.crimes),
            'cameras': len(self.cameras),
            'buildings': len(self.buildings),
            'land_use_areas': len(self.land_use_areas),
            'roads': len(self.roads),
            'pois': len(self.pois)
        }


def _read_json(data_path: str) -> Any:
    """
    Read a JSON dataset file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Dataset file not found: {data_path}")

    logger.info(f"Loading dataset from: {data_path}")

    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in dataset file {data_path}: {e}")


def _features(data: Any, data_path: str) -> List[Dict[str, Any]]:
    if not isinstance(data, dict) or 'features' not in data:
        raise ValueError(f"{data_path} must be in GeoJSON format with 'features' key")
    return data['features']


def _iter_point_records(data: Any, data_path: str) -> Iterator[Tuple[float, float, Dict[str, Any]]]:
    """Yield (lon, lat, properties) from a record list or a Point FeatureCollection."""
    if isinstance(data, list):
        for record in data:
            try:
                yield float(record['lon']), float(record['lat']), record
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping record without valid coordinates: {record}")
        return

    for feature in _features(data, data_path):
        geometry = feature.get('geometry') or {}
        coords = geometry.get('coordinates') or []
        if geometry.get('type') != 'Point' or len(coords) < 2:
            logger.debug("Skipping non-point feature")
            continue
        yield float(coords[0]), float(coords[1]), feature.get('properties') or {}


def _polygon_ring(geometry: Dict[str, Any]) -> List[Tuple[float, float]]:
    """Outer ring of a Polygon (or first polygon of a MultiPolygon)."""
    geometry_type = geometry.get('type')
    coords = geometry.get('coordinates') or []

    if geometry_type == 'MultiPolygon' and coords:
        coords = coords[0]
    elif geometry_type != 'Polygon':
        return []

    if not coords:
        return []
    return [(float(p[0]), float(p[1])) for p in coords[0]]


def load_crimes(data_path: str) -> List[CrimePoint]:
    """
    Load crime incidents.

    Weights already present on a record are kept; otherwise the weight is
    resolved from the incident type through the crime category table.
    """
    data = _read_json(data_path)
    crimes = []

    for i, (lon, lat, props) in enumerate(_iter_point_records(data, data_path)):
        crime_type = props.get('type') or props.get('crime_type') or ""
        weight = props.get('weight')
        crimes.append(CrimePoint(
            lon=lon,
            lat=lat,
            crime_type=crime_type,
            weight=int(weight) if weight is not None else crime_weight(crime_type),
            id=str(props.get('id', f"crime_{i}"))
        ))

    logger.info(f"Loaded {len(crimes)} crime incidents")
    return crimes


def load_cameras(data_path: str, config: Optional[ScoringConfig] = None) -> List[CameraPoint]:
    """Load security cameras; records without radius or decay take the config defaults."""
    config = config or ScoringConfig()
    data = _read_json(data_path)
    cameras = []

    for i, (lon, lat, props) in enumerate(_iter_point_records(data, data_path)):
        radius = props.get('effectiveRadius', props.get('effective_radius', config.camera_effective_radius))
        decay = props.get('decayConstant', props.get('decay_constant', config.camera_decay_constant))
        cameras.append(CameraPoint(
            lon=lon,
            lat=lat,
            effective_radius=float(radius),
            decay_constant=float(decay),
            id=str(props.get('id', f"camera_{i}"))
        ))

    logger.info(f"Loaded {len(cameras)} cameras")
    return cameras


def load_land_use(data_path: str) -> List[LandUseArea]:
    """Load land-use polygons, resolving missing safety scores from the code table."""
    data = _read_json(data_path)
    areas = []
    skipped = 0

    for i, feature in enumerate(_features(data, data_path)):
        polygon = _polygon_ring(feature.get('geometry') or {})
        if len(polygon) < 3:
            skipped += 1
            continue

        props = feature.get('properties') or {}
        category = land_use_category(props.get('code'))
        safety_score = props.get('safetyScore', props.get('safety_score'))

        areas.append(LandUseArea(
            id=str(props.get('id', f"landuse_{i}")),
            polygon=polygon,
            safety_score=float(safety_score) if safety_score is not None else category.safety_score,
            code=category.code if props.get('code') is None else str(props['code']),
            name=props.get('name') or category.label
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} land-use features with malformed polygons")
    logger.info(f"Loaded {len(areas)} land-use areas")
    return areas


def load_buildings(data_path: str) -> List[Building]:
    """Load building footprints."""
    data = _read_json(data_path)
    buildings = []
    skipped = 0

    for i, feature in enumerate(_features(data, data_path)):
        polygon = _polygon_ring(feature.get('geometry') or {})
        if len(polygon) < 3:
            skipped += 1
            continue

        props = feature.get('properties') or {}
        usage = props.get('usage')
        if usage is None:
            usage = building_usage(props.get('usageCode')).label

        buildings.append(Building(
            id=str(props.get('id', f"building_{i}")),
            polygon=polygon,
            height=float(props.get('height') or 5.0),
            storeys=int(props.get('storeys') or 1),
            usage=usage
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} building features with malformed polygons")
    logger.info(f"Loaded {len(buildings)} buildings")
    return buildings


def load_roads(data_path: str) -> List[RoadSegment]:
    """Load road segments (LineString features with at least two points)."""
    data = _read_json(data_path)
    roads = []
    skipped = 0

    for i, feature in enumerate(_features(data, data_path)):
        geometry = feature.get('geometry') or {}
        coords = geometry.get('coordinates') or []
        if geometry.get('type') != 'LineString' or len(coords) < 2:
            skipped += 1
            continue

        props = feature.get('properties') or {}
        roads.append(RoadSegment(
            id=str(props.get('id', f"road_{i}")),
            highway=props.get('highway') or 'unclassified',
            coordinates=[(float(c[0]), float(c[1])) for c in coords],
            name=props.get('name') or ""
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} road features with malformed geometry")
    logger.info(f"Loaded {len(roads)} road segments")
    return roads


def load_pois(data_path: str) -> List[PointOfInterest]:
    """Load points of interest."""
    data = _read_json(data_path)
    pois = []

    for i, (lon, lat, props) in enumerate(_iter_point_records(data, data_path)):
        pois.append(PointOfInterest(
            id=str(props.get('id', f"poi_{i}")),
            poi_type=props.get('type') or props.get('poi_type') or 'other',
            name=props.get('name') or "",
            lon=lon,
            lat=lat,
            is_24h=bool(props.get('is_24h', False))
        ))

    logger.info(f"Loaded {len(pois)} points of interest")
    return pois


_LOADERS = {
    'crimes': load_crimes,
    'cameras': load_cameras,
    'buildings': load_buildings,
    'land_use': load_land_use,
    'roads': load_roads,
    'pois': load_pois
}

_BUNDLE_FIELDS = {
    'crimes': 'crimes',
    'cameras': 'cameras',
    'buildings': 'buildings',
    'land_use': 'land_use_areas',
    'roads': 'roads',
    'pois': 'pois'
}


def load_dataset_bundle(data_dir: Optional[str] = None,
                        config: Optional[ScoringConfig] = None) -> DatasetBundle:
    """
    Load every dataset found in a directory.

    Missing files leave their collection empty so scoring degrades to
    neutral defaults instead of failing.

    Args:
        data_dir: Directory containing the dataset files
        config: Scoring configuration supplying camera defaults

    Returns:
        DatasetBundle with all collections that could be found
    """
    if data_dir is None:
        current_dir = os.path.dirname(os.path.abspath(__file__))
        data_dir = os.path.join(current_dir, '..', 'datasets')

    bundle = DatasetBundle()

    for name, filename in DATASET_FILES.items():
        data_path = os.path.join(data_dir, filename)
        if not os.path.exists(data_path):
            logger.warning(f"Dataset '{name}' not found at {data_path} - using empty collection")
            continue
        if name == 'cameras':
            collection = load_cameras(data_path, config)
        else:
            collection = _LOADERS[name](data_path)
        setattr(bundle, _BUNDLE_FIELDS[name], collection)

    logger.info(f"Dataset bundle loaded: {bundle.get_counts()}")
    return bundle
