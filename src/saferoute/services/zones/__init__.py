"""Unsafe zone registry exports."""

from .registry import UNSAFE_ZONES, UnsafeZoneRegistry, get_zone_registry, load_zones_from_file

__all__ = ["UNSAFE_ZONES", "UnsafeZoneRegistry", "get_zone_registry", "load_zones_from_file"]
