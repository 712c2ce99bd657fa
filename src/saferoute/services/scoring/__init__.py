"""Route scoring and selection exports."""

from .scorer import ZoneExposure, calculate_safety_score, score_routes, zone_exposure
from .selection import select_best

__all__ = [
    "ZoneExposure",
    "calculate_safety_score",
    "score_routes",
    "zone_exposure",
    "select_best",
]
