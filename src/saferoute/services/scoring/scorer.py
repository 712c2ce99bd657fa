"""Route safety scoring against the unsafe zone catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from ...errors import InvalidRoute
from ...models.domain import Route, UnsafeZone
from ..geospatial import haversine_meters

DANGER_SCALE = 10.0
PENALTY_PER_DANGER_KM = 5.0
MAX_SCORE = 100
MIN_SCORE = 0


@dataclass(slots=True)
class ZoneExposure:
    zone_id: str
    severity: str
    points_inside: int
    danger: float


def _validate_route(route: Route) -> None:
    if len(route.coordinates) < 2:
        raise InvalidRoute(f"Route {route.id} needs at least two coordinates to be scored.")
    if not route.distance_meters > 0:
        raise InvalidRoute(f"Route {route.id} has non-positive distance {route.distance_meters}.")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def zone_exposure(route: Route, zones: Iterable[UnsafeZone]) -> list[ZoneExposure]:
    """Break down the danger accumulated by ``route`` per zone, in zone order.

    Zones the route never enters are omitted.
    """

    exposures: list[ZoneExposure] = []
    for zone in zones:
        danger = 0.0
        inside = 0
        for point in route.coordinates:
            distance = haversine_meters(point, zone.center)
            if distance <= zone.radius_meters:
                proximity = 1 - distance / zone.radius_meters
                danger += zone.severity.weight * proximity * DANGER_SCALE
                inside += 1
        if inside:
            exposures.append(
                ZoneExposure(
                    zone_id=zone.id,
                    severity=zone.severity.value,
                    points_inside=inside,
                    danger=danger,
                )
            )
    return exposures


def calculate_safety_score(route: Route, zones: Iterable[UnsafeZone]) -> int:
    """Return a 0-100 safety score for ``route``; higher is safer.

    Every coordinate is sampled against every zone. Danger decays linearly from
    ``weight * 10`` at a zone center to zero at its boundary, and the total is
    normalised per kilometre of route so routes of different lengths compare on
    hazard density.
    """

    _validate_route(route)
    zone_list = list(zones)
    total_danger = 0.0
    for point in route.coordinates:
        for zone in zone_list:
            distance = haversine_meters(point, zone.center)
            if distance <= zone.radius_meters:
                total_danger += zone.severity.weight * (1 - distance / zone.radius_meters) * DANGER_SCALE
    danger_per_km = total_danger / (route.distance_meters / 1000)
    raw_score = max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - danger_per_km * PENALTY_PER_DANGER_KM))
    return _round_half_up(raw_score)


def score_routes(routes: Sequence[Route], zones: Iterable[UnsafeZone]) -> list[Route]:
    """Return scored copies of ``routes`` in input order."""

    zone_list = list(zones)
    return [replace(route, safety_score=calculate_safety_score(route, zone_list)) for route in routes]
