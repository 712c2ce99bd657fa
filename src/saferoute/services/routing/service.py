"""Safe-route planning orchestration."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Coordinate, Route, RouteMode, UnsafeZone
from ...schemas.routing import (
    CoordinateModel,
    SafeRouteRequest,
    SafeRouteResponse,
    SafetyRatingModel,
    ScoredRouteModel,
    ScoreRoutesRequest,
    ZoneExposureModel,
)
from ..directions.ors_client import DirectionsClient
from ..outputs.formatter import format_distance, format_duration, safety_rating
from ..scoring.scorer import score_routes, zone_exposure
from ..scoring.selection import select_best
from ..zones.registry import get_zone_registry

logger = logging.getLogger(__name__)


def _coordinate_models(coordinates: Sequence[Coordinate]) -> list[CoordinateModel]:
    return [CoordinateModel(lat=point.lat, lon=point.lon) for point in coordinates]


def _build_map_overlays(routes: Sequence[Route], best: Route, zones: Sequence[UnsafeZone]) -> dict:
    return {
        "routes": [
            {
                "route_id": route.id,
                "coordinates": [[point.lat, point.lon] for point in route.coordinates],
                "safety_score": route.safety_score,
                "recommended": route.id == best.id,
            }
            for route in routes
        ],
        "zones": [
            {
                "zone_id": zone.id,
                "center": [zone.center.lat, zone.center.lon],
                "radius_meters": zone.radius_meters,
                "severity": zone.severity.value,
            }
            for zone in zones
        ],
    }


def _to_response(
    routes: Sequence[Route],
    mode: RouteMode,
    zones: Sequence[UnsafeZone],
    metadata: dict,
) -> SafeRouteResponse:
    scored = score_routes(routes, zones)
    best = select_best(scored, mode)

    models = []
    for route in scored:
        rating = safety_rating(route.safety_score)
        models.append(
            ScoredRouteModel(
                id=route.id,
                distance_meters=route.distance_meters,
                duration_seconds=route.duration_seconds,
                safety_score=route.safety_score,
                distance_text=format_distance(route.distance_meters),
                duration_text=format_duration(route.duration_seconds),
                rating=SafetyRatingModel(label=rating.label, tier=rating.tier, color=rating.color),
                exposures=[
                    ZoneExposureModel(
                        zone_id=exposure.zone_id,
                        severity=exposure.severity,
                        points_inside=exposure.points_inside,
                        danger=round(exposure.danger, 2),
                    )
                    for exposure in zone_exposure(route, zones)
                ],
                coordinates=_coordinate_models(route.coordinates),
                recommended=route.id == best.id,
            )
        )

    logger.info(
        f"Scored {len(scored)} route(s) in {mode.value} mode: "
        + ", ".join(f"#{route.id}={route.safety_score}" for route in scored)
        + f"; recommended #{best.id}"
    )

    metadata = dict(metadata)
    metadata["zone_count"] = len(zones)
    metadata["map_overlays"] = _build_map_overlays(scored, best, zones)
    return SafeRouteResponse(
        mode=mode,
        recommended_route_id=best.id,
        routes=models,
        metadata=metadata,
    )


def plan_safe_route(payload: SafeRouteRequest) -> SafeRouteResponse:
    """Fetch alternatives from the directions provider, score them and pick one."""

    start = payload.start.to_domain()
    end = payload.end.to_domain()
    client = DirectionsClient()
    routes = client.get_routes(start, end, alternatives=payload.alternatives)

    zones = get_zone_registry().zones
    return _to_response(
        routes,
        payload.mode,
        zones,
        metadata={
            "source": "directions",
            "profile": client.profile,
            "start": [start.lat, start.lon],
            "end": [end.lat, end.lon],
        },
    )


def score_candidate_routes(payload: ScoreRoutesRequest) -> SafeRouteResponse:
    """Score caller-supplied routes without contacting the directions provider."""

    routes = [
        Route(
            id=candidate.id,
            coordinates=[point.to_domain() for point in candidate.coordinates],
            distance_meters=candidate.distance_meters,
            duration_seconds=candidate.duration_seconds,
        )
        for candidate in payload.routes
    ]
    zones = get_zone_registry().zones
    return _to_response(routes, payload.mode, zones, metadata={"source": "request"})


def fetch_scored_routes(start: Coordinate, end: Coordinate, alternatives: int | None = None) -> list[Route]:
    """Return provider routes with safety scores attached, for GeoJSON export."""

    routes = DirectionsClient().get_routes(start, end, alternatives=alternatives)
    return score_routes(routes, get_zone_registry().zones)
