import pytest

from safety_routing.config.category_tables import (
    BuildingUsage,
    CrimeCategory,
    LandUseCode,
    building_usage,
    classify_crime,
    crime_weight,
    land_use_category,
    land_use_safety,
)


@pytest.mark.parametrize("crime_type,weight", [
    ("street robbery", 6),
    ("Bag snatching near station", 5),
    ("assault", 4),
    ("suspicious person", 2),
    ("vehicle break-in", 3),
    ("house break-in", 5),
    ("bicycle theft", 1),
    ("ひったくり", 5),
    ("自転車盗", 1),
])
def test_crime_weights(crime_type, weight):
    assert crime_weight(crime_type) == weight


def test_unknown_crime_defaults_to_one():
    assert crime_weight("littering") == 1
    assert crime_weight("") == 1
    assert crime_weight(None) == 1
    assert classify_crime("littering") is None


def test_first_matching_category_wins():
    # Mentions both bag snatching and bicycle theft
    assert classify_crime("bicycle theft after bag snatching") is CrimeCategory.BAG_SNATCHING


def test_category_properties():
    assert CrimeCategory.ROBBERY.weight == 6
    assert "robbery" in CrimeCategory.ROBBERY.keywords


def test_land_use_lookup():
    assert land_use_category("212") is LandUseCode.COMMERCIAL
    assert land_use_safety("212") == 1.0
    assert land_use_safety("203") == 0.1
    assert land_use_safety(211) == 0.6


def test_land_use_unknown_code_falls_back():
    assert land_use_category("999") is LandUseCode.UNKNOWN
    assert land_use_category(None).safety_score == 0.5


def test_land_use_table_is_complete():
    assert len(LandUseCode) == 26
    assert all(0.0 <= member.safety_score <= 1.0 for member in LandUseCode)


def test_building_usage_lookup():
    assert building_usage("412") is BuildingUsage.APARTMENT
    assert building_usage("412").label == "apartment"
    assert building_usage("000") is BuildingUsage.OTHER
    assert building_usage(None).color == "#9ca3af"
