"""Human-readable distance, duration and safety rating text."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SafetyRating:
    label: str
    tier: str
    color: str


# (lower bound inclusive, rating), highest band first
_RATING_BANDS: tuple[tuple[float, SafetyRating], ...] = (
    (80, SafetyRating(label="Very Safe", tier="very_safe", color="green")),
    (60, SafetyRating(label="Safe", tier="safe", color="blue")),
    (40, SafetyRating(label="Moderate", tier="moderate", color="yellow")),
    (20, SafetyRating(label="Caution", tier="caution", color="orange")),
)
_UNSAFE = SafetyRating(label="Unsafe", tier="unsafe", color="red")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{_round_half_up(meters)} m"
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: float) -> str:
    minutes = _round_half_up(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    hours, remaining = divmod(minutes, 60)
    return f"{hours}h {remaining}m"


def safety_rating(score: float) -> SafetyRating:
    for lower_bound, rating in _RATING_BANDS:
        if score >= lower_bound:
            return rating
    return _UNSAFE
