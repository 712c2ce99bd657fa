"""Recommended route selection."""

from __future__ import annotations

from typing import Sequence

from ...errors import InvalidRoute, NoRoutesAvailable
from ...models.domain import Route, RouteMode


def _safest_key(route: Route) -> tuple[float, float, int]:
    return (-route.safety_score, route.distance_meters, route.id)


def _shortest_key(route: Route) -> tuple[float, float, int]:
    return (route.distance_meters, -route.safety_score, route.id)


def select_best(routes: Sequence[Route], mode: RouteMode | str) -> Route:
    """Pick the recommended route for ``mode``.

    ``safest`` prefers the highest score, then the shorter distance; ``shortest``
    prefers the shorter distance, then the higher score. Remaining ties go to the
    lowest route id.
    """

    try:
        resolved_mode = RouteMode(mode)
    except ValueError as exc:
        raise ValueError(f"Unknown route mode '{mode}'.") from exc

    if not routes:
        raise NoRoutesAvailable("No routes available to select from.")
    unscored = [route.id for route in routes if route.safety_score is None]
    if unscored:
        raise InvalidRoute(f"Routes {unscored} must be scored before selection.")

    key = _safest_key if resolved_mode is RouteMode.SAFEST else _shortest_key
    return min(routes, key=key)
