"""Points calculation for volunteer-rank.

Points are a display and ranking score derived from service hours.
All results are integers (math.floor for rounding).
"""

from __future__ import annotations

import math

POINTS_PER_HOUR = 10


def _clamp_non_negative(value: float) -> float:
    """Treat negative values as 0."""
    return max(0.0, value)


def calculate_points(hours: float) -> int:
    """Return floor(hours * POINTS_PER_HOUR).

    E.g., 18.07 hours -> 180 points. Negative hours are clamped to 0.
    """
    return math.floor(_clamp_non_negative(hours) * POINTS_PER_HOUR)
