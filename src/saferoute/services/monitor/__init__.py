"""Route deviation monitor exports."""

from .simulation import (
    ProximityDeviationModel,
    RouteDeviationMonitor,
    SimulatedDeviationModel,
)

__all__ = ["RouteDeviationMonitor", "SimulatedDeviationModel", "ProximityDeviationModel"]
