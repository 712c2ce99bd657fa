"""Domain models for coordinates, unsafe zones and routes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..errors import InvalidCoordinate


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS-84 latitude/longitude pair in degrees."""

    lat: float
    lon: float

    def as_pair(self) -> tuple[float, float]:
        return (self.lat, self.lon)


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    """Return the coordinate unchanged, or raise if it is not a valid position."""

    lat, lon = coordinate.lat, coordinate.lon
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(f"Coordinate ({lat}, {lon}) is not finite.")
    if abs(lat) > 90 or abs(lon) > 180:
        raise InvalidCoordinate(f"Coordinate ({lat}, {lon}) is out of range.")
    return coordinate


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        """Multiplicative danger weight used by the scorer."""
        return _SEVERITY_WEIGHTS[self]


_SEVERITY_WEIGHTS = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


class RouteMode(str, Enum):
    SAFEST = "safest"
    SHORTEST = "shortest"


@dataclass(frozen=True, slots=True)
class UnsafeZone:
    """Circular hazard area with a severity label."""

    id: str
    center: Coordinate
    radius_meters: float
    severity: Severity
    description: str = ""

    def __post_init__(self) -> None:
        if not self.radius_meters > 0:
            raise ValueError(f"Unsafe zone '{self.id}' radius_meters must be > 0")


@dataclass(slots=True)
class Route:
    """Candidate route as returned by the directions provider."""

    id: int
    coordinates: list[Coordinate]
    distance_meters: float
    duration_seconds: float
    safety_score: Optional[int] = None
    segments: list[dict] = field(default_factory=list)

    @property
    def is_scored(self) -> bool:
        return self.safety_score is not None


@dataclass(frozen=True, slots=True)
class RouteDeviation:
    distance_from_route_meters: float
    off_route: bool
