"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..config import settings
from ..models.domain import Coordinate


def haversine_meters(start: Coordinate, end: Coordinate, *, radius_meters: Optional[float] = None) -> float:
    """Compute great-circle distance between two coordinates using the Haversine formula."""

    radius = settings.earth_radius_meters if radius_meters is None else radius_meters
    phi1, phi2 = math.radians(start.lat), math.radians(end.lat)
    d_phi = math.radians(end.lat - start.lat)
    d_lambda = math.radians(end.lon - start.lon)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just outside [0, 1] near antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c


def distance_to_route(point: Coordinate, route: Sequence[Coordinate]) -> float:
    """Return the distance from ``point`` to the closest vertex of ``route``.

    Only vertices are considered, so the result overestimates the true distance
    when the closest approach lies mid-segment between sparse vertices.
    """

    if not route:
        return math.inf
    return min(haversine_meters(point, vertex) for vertex in route)
