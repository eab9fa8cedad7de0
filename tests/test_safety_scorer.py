import pytest

from safety_routing.algorithms.scoring.safety_scorer import (
    SafetyScorer,
    round_half_up,
    score_color,
    score_label,
)
from safety_routing.config import ScoringConfig
from safety_routing.data.models import Building, CameraPoint, CrimePoint, LandUseArea, RoadSegment


def spread_roads(count=3, spacing=0.01):
    """Two-point roads whose midpoints are about 1km apart."""
    roads = []
    for i in range(count):
        lon = 139.70 + i * spacing
        roads.append(RoadSegment(
            id=f"r{i}",
            highway="residential",
            coordinates=[(lon, 35.80), (lon + 0.0005, 35.80)]
        ))
    return roads


def square_around(point, half=0.0001):
    lon, lat = point
    return [(lon - half, lat - half), (lon + half, lat - half), (lon + half, lat + half), (lon - half, lat + half)]


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_empty_roads_score_to_empty_list():
    assert SafetyScorer().score_roads([], [], [], [], [], simulated_hour=12) == []


def test_neutral_network_daytime():
    # Every indicator degenerates to 0.5: raw 56.25 -> 50 + 28.125
    scored = SafetyScorer().score_roads(spread_roads(), [], [], [], [], simulated_hour=12)
    assert [r.safety_score for r in scored] == [78, 78, 78]


def test_neutral_network_late_night():
    # Overall multiplier 0.5 at 02:00: 28.125 -> 50 + 14.0625
    scored = SafetyScorer().score_roads(spread_roads(), [], [], [], [], simulated_hour=2)
    assert [r.safety_score for r in scored] == [64, 64, 64]


def test_crime_hotspot_lowers_segment_score():
    roads = spread_roads()
    hotspot = roads[0].midpoint
    crimes = [CrimePoint(lon=hotspot[0], lat=hotspot[1], weight=6)]

    scored = SafetyScorer().score_roads(roads, crimes, [], [], [], simulated_hour=12)
    scores = {r.id: r.safety_score for r in scored}

    # crime_norm = 1 with neutral camera: 100 * (0.5 * 0.25 + 0.1 + 0.15) = 37.5
    assert scores["r0"] == 69
    assert scores["r1"] > scores["r0"]
    assert scores["r2"] > scores["r0"]


def test_camera_softens_crime_risk():
    roads = spread_roads()
    crimes = [CrimePoint(lon=r.midpoint[0], lat=r.midpoint[1], weight=i + 1) for i, r in enumerate(roads)]

    without_camera = SafetyScorer().score_roads(roads, crimes, [], [], [], simulated_hour=12)

    camera_at = roads[2].midpoint
    cameras = [CameraPoint(lon=camera_at[0], lat=camera_at[1])]
    with_camera = SafetyScorer().score_roads(roads, crimes, cameras, [], [], simulated_hour=12)

    assert with_camera[2].safety_score > without_camera[2].safety_score


def test_tall_building_lowers_segment_score():
    roads = spread_roads()
    tower = Building(id="b1", polygon=square_around(roads[0].midpoint), height=30.0)
    # A building ~1km away falls outside the 0.001 degree pre-filter
    distant = Building(id="b2", polygon=square_around((139.69, 35.80)), height=30.0)

    day = SafetyScorer().score_roads(roads, [], [], [tower, distant], [], simulated_hour=12)
    night = SafetyScorer().score_roads(roads, [], [], [tower, distant], [], simulated_hour=2)

    # shadow_norm = 1 on r0: 100 * (0.3125 + 0 + 0.15) = 46.25
    assert [r.safety_score for r in day] == [73, 83, 83]
    assert [r.safety_score for r in night] == [62, 67, 67]


def test_shadow_weighs_more_at_night_for_a_point():
    point = (139.72, 35.80)
    tower = Building(id="b1", polygon=square_around(point), height=30.0)

    day = SafetyScorer().score_point(point[1], point[0], [], [], [tower], [], simulated_hour=12)
    night = SafetyScorer().score_point(point[1], point[0], [], [], [tower], [], simulated_hour=2)

    # shadow raw 1.0 times 0.3 by day and 3.0 at night, over a scale of 5
    assert day.shadow == 94
    assert night.shadow == 40


def test_land_use_is_blended_without_normalization():
    roads = spread_roads()
    commercial = LandUseArea(id="lu1", polygon=square_around(roads[1].midpoint), safety_score=1.0)

    scored = SafetyScorer().score_roads(roads, [], [], [], [commercial], simulated_hour=12)

    # 0.30 * 1.0 instead of 0.30 * 0.5: 71.25 -> 85.625
    assert [r.safety_score for r in scored] == [78, 86, 78]


def test_scores_stay_in_public_range():
    roads = spread_roads(count=25, spacing=0.001)
    crimes = [CrimePoint(lon=139.70 + i * 0.002, lat=35.80, weight=6) for i in range(10)]

    for hour in (2, 12, 23):
        scored = SafetyScorer().score_roads(roads, crimes, [], [], [], simulated_hour=hour)
        assert len(scored) == 25
        assert all(isinstance(r.safety_score, int) for r in scored)
        assert all(50 <= r.safety_score <= 100 for r in scored)


def test_input_roads_are_not_mutated():
    roads = spread_roads()
    SafetyScorer().score_roads(roads, [], [], [], [], simulated_hour=12)
    assert all(r.safety_score is None for r in roads)


def test_roads_without_coordinates_are_skipped():
    roads = spread_roads() + [RoadSegment(id="empty", highway="path", coordinates=[])]
    scored = SafetyScorer().score_roads(roads, [], [], [], [], simulated_hour=12)
    assert [r.id for r in scored] == ["r0", "r1", "r2"]


def test_invalid_weights_rejected():
    with pytest.raises(ValueError):
        SafetyScorer(ScoringConfig(crime_weight=0.6))


def test_point_breakdown_without_data():
    breakdown = SafetyScorer().score_point(35.80, 139.72, [], [], [], [], simulated_hour=12)

    assert breakdown.total == 85
    assert breakdown.crime == 100
    assert breakdown.camera == 0
    assert breakdown.shadow == 100
    assert breakdown.land_use == 50


def test_point_breakdown_saturates_crime():
    crimes = [CrimePoint(lon=139.72, lat=35.80, weight=6), CrimePoint(lon=139.72, lat=35.80, weight=6)]
    breakdown = SafetyScorer().score_point(35.80, 139.72, crimes, [], [], [], simulated_hour=12)

    # crime raw 12 / 10 is capped at 1
    assert breakdown.crime == 0
    assert breakdown.total == 35


def test_scoring_statistics():
    roads = [r.with_score(s) for r, s in zip(spread_roads(), (60, 70, 80))]
    stats = SafetyScorer.get_scoring_statistics(roads)

    assert stats['scored_segments'] == 3
    assert stats['mean'] == 70.0
    assert stats['min'] == 60
    assert stats['max'] == 80


@pytest.mark.parametrize("score,color,label", [
    (95, '#22c55e', 'safe'),
    (90, '#22c55e', 'safe'),
    (85, '#84cc16', 'fairly safe'),
    (72, '#eab308', 'caution'),
    (60, '#f97316', 'warning'),
    (55, '#ef4444', 'danger'),
])
def test_score_bands(score, color, label):
    assert score_color(score) == color
    assert score_label(score) == label
