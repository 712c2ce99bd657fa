"""Export services."""

from .geojson import route_to_feature, routes_to_feature_collection, zone_to_feature

__all__ = [
    "route_to_feature",
    "zone_to_feature",
    "routes_to_feature_collection",
]
