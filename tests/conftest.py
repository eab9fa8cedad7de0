import json
from datetime import datetime

import pytest

from safety_routing.algorithms.scoring import time_of_day
from safety_routing.config import ScoringConfig
from safety_routing.data.models import RoadSegment

# A small triangle near Kawaguchi: A-B is a direct ~90m street,
# A-C-B a ~143m detour through C. M is the midpoint of A-B.
POINT_A = (139.7200, 35.8000)
POINT_B = (139.7210, 35.8000)
POINT_C = (139.7205, 35.8005)
POINT_M = (139.7205, 35.8000)


@pytest.fixture
def config():
    return ScoringConfig()


class FixedClock:
    """Replacement for the datetime class that reports a settable hour."""

    def __init__(self, hour):
        self.hour = hour

    def now(self):
        return datetime(2026, 10, 19, self.hour, 30)


@pytest.fixture
def clock(monkeypatch):
    """Pin the wall clock to 12:30; tests move it by setting ``clock.hour``."""
    fixed = FixedClock(12)
    monkeypatch.setattr(time_of_day, "datetime", fixed)
    return fixed


@pytest.fixture
def triangle_points():
    return {'A': POINT_A, 'B': POINT_B, 'C': POINT_C}


@pytest.fixture
def triangle_roads():
    """Pre-scored roads: the short street is less safe than the detour."""
    return [
        RoadSegment(id="direct", highway="residential", coordinates=[POINT_A, POINT_B], safety_score=90),
        RoadSegment(id="detour", highway="footway", coordinates=[POINT_A, POINT_C, POINT_B], safety_score=100),
    ]


def _feature_collection(features):
    return {"type": "FeatureCollection", "features": features}


def _line(road_id, coords, highway="residential"):
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [list(c) for c in coords]},
        "properties": {"id": road_id, "highway": highway, "name": road_id},
    }


@pytest.fixture
def dataset_dir(tmp_path):
    """
    A dataset directory with roads, crimes, cameras and points of interest.

    The robbery sits on the direct street and the camera on the detour, so the
    detour scores high enough to win the safety-weighted search.
    """
    roads = _feature_collection([
        _line("direct", [POINT_A, POINT_M, POINT_B]),
        _line("detour", [POINT_A, POINT_C, POINT_B], highway="footway"),
    ])
    crimes = [
        {"id": "c1", "type": "street robbery", "lon": POINT_M[0], "lat": POINT_M[1]},
        {"id": "c2", "type": "bicycle theft", "lon": POINT_C[0], "lat": POINT_C[1]},
    ]
    cameras = [
        {"id": "cam1", "lon": POINT_C[0], "lat": POINT_C[1], "effectiveRadius": 80, "decayConstant": 30},
    ]
    pois = [
        {"id": "p1", "type": "convenience_store", "name": "Corner Shop",
         "lon": 139.7205, "lat": 35.8001, "is_24h": True},
    ]

    (tmp_path / "roads.json").write_text(json.dumps(roads), encoding="utf-8")
    (tmp_path / "crimes.json").write_text(json.dumps(crimes), encoding="utf-8")
    (tmp_path / "cameras.json").write_text(json.dumps(cameras), encoding="utf-8")
    (tmp_path / "pois.json").write_text(json.dumps(pois), encoding="utf-8")

    return tmp_path
