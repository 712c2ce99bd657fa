"""Route group exports."""

from . import health, routes, zones

__all__ = ["health", "routes", "zones"]
