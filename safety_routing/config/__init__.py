"""
Configuration management for safety scoring and routing.
"""

from .routing_config import ScoringConfig
from .category_tables import (
    CrimeCategory,
    LandUseCode,
    BuildingUsage,
    classify_crime,
    crime_weight,
    land_use_category,
    land_use_safety,
    building_usage
)

__all__ = [
    'ScoringConfig',
    'CrimeCategory',
    'LandUseCode',
    'BuildingUsage',
    'classify_crime',
    'crime_weight',
    'land_use_category',
    'land_use_safety',
    'building_usage'
]
