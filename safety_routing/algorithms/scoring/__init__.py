"""
Safety scoring: risk indicators, quantile normalization and aggregation.
"""

from .normalization import QuantileNormalizer
from .risk_indicators import camera_index, crime_index, land_use_index, nearby_buildings, shadow_index
from .time_of_day import TimeMultiplier, get_time_description, get_time_multiplier, resolve_hour
from .safety_scorer import RawIndicators, SafetyScorer, score_color, score_label

__all__ = [
    'QuantileNormalizer',
    'crime_index',
    'camera_index',
    'shadow_index',
    'land_use_index',
    'nearby_buildings',
    'TimeMultiplier',
    'get_time_multiplier',
    'get_time_description',
    'resolve_hour',
    'RawIndicators',
    'SafetyScorer',
    'score_color',
    'score_label'
]
