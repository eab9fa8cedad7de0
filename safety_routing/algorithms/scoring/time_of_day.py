"""
Time-of-day multipliers for safety scoring.
"""

from datetime import datetime
from typing import NamedTuple, Optional


class TimeMultiplier(NamedTuple):
    overall: float
    shadow_multiplier: float
    camera_multiplier: float


# (start_hour, end_hour, multiplier)
DAY_PHASES = (
    (0, 6, TimeMultiplier(overall=0.5, shadow_multiplier=3.0, camera_multiplier=2.0)),    # late night
    (6, 18, TimeMultiplier(overall=1.0, shadow_multiplier=0.3, camera_multiplier=1.0)),   # daytime
    (18, 20, TimeMultiplier(overall=0.9, shadow_multiplier=1.5, camera_multiplier=1.0)),  # evening
    (20, 22, TimeMultiplier(overall=0.8, shadow_multiplier=2.0, camera_multiplier=1.2)),  # night
    (22, 24, TimeMultiplier(overall=0.7, shadow_multiplier=2.5, camera_multiplier=1.5)),  # late evening
)

TIME_DESCRIPTIONS = (
    (0, 5, "late night (very dark)"),
    (5, 7, "early morning (dim)"),
    (7, 10, "morning (commuting hours)"),
    (10, 17, "daytime (bright)"),
    (17, 19, "dusk (getting dark)"),
    (19, 22, "night (dark)"),
    (22, 24, "late evening (quite dark)"),
)


def resolve_hour(simulated_hour: Optional[int] = None) -> int:
    """
    Effective hour: the explicit override, else the wall-clock hour.

    Raises:
        ValueError: If the override is outside 0-23
    """
    if simulated_hour is None:
        return datetime.now().hour

    if not 0 <= simulated_hour <= 23:
        raise ValueError(f"simulated_hour must be between 0 and 23, got {simulated_hour}")
    return int(simulated_hour)


def get_time_multiplier(hour: int) -> TimeMultiplier:
    """Multiplier triple for the day phase containing ``hour``."""
    for start, end, multiplier in DAY_PHASES:
        if start <= hour < end:
            return multiplier

    # Outside 0-24 falls into the last bucket
    return DAY_PHASES[-1][2]


def get_time_description(hour: int) -> str:
    """Human-readable description of the lighting conditions at ``hour``."""
    for start, end, description in TIME_DESCRIPTIONS:
        if start <= hour < end:
            return description

    return TIME_DESCRIPTIONS[-1][2]
