"""GeoJSON export utilities for map overlays."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ...models.domain import Route, UnsafeZone
from ..outputs.formatter import safety_rating

SEVERITY_COLORS = {
    "low": "#e0af00",
    "medium": "#e06a00",
    "high": "#e0003e",
}


def route_to_feature(route: Route, *, recommended: bool = False) -> Dict[str, Any]:
    """Convert a route to a GeoJSON LineString feature.

    GeoJSON uses lon,lat order, unlike the lat,lon order used internally.
    """
    if len(route.coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    properties: Dict[str, Any] = {
        "route_id": route.id,
        "distance_meters": route.distance_meters,
        "duration_seconds": route.duration_seconds,
        "safety_score": route.safety_score,
        "recommended": recommended,
    }
    if route.safety_score is not None:
        properties["rating"] = safety_rating(route.safety_score).label
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [[point.lon, point.lat] for point in route.coordinates],
        },
        "properties": properties,
    }


def zone_to_feature(zone: UnsafeZone) -> Dict[str, Any]:
    """Convert an unsafe zone to a Point feature; clients draw the circle from ``radius_meters``."""
    return {
        "type": "Feature",
        "id": zone.id,
        "geometry": {
            "type": "Point",
            "coordinates": [zone.center.lon, zone.center.lat],
        },
        "properties": {
            "zone_id": zone.id,
            "radius_meters": zone.radius_meters,
            "severity": zone.severity.value,
            "description": zone.description,
            "color": SEVERITY_COLORS[zone.severity.value],
        },
    }


def routes_to_feature_collection(
    routes: Sequence[Route],
    zones: Sequence[UnsafeZone] = (),
    recommended_route_id: Optional[int] = None,
) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = [
        route_to_feature(route, recommended=route.id == recommended_route_id) for route in routes
    ]
    features.extend(zone_to_feature(zone) for zone in zones)
    return {"type": "FeatureCollection", "features": features}
