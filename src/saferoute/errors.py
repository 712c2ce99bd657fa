"""Error types raised by the safe-route engine."""

from __future__ import annotations


class SafeRouteError(ValueError):
    """Base class for caller-facing engine errors."""


class InvalidCoordinate(SafeRouteError):
    """Latitude or longitude outside the valid range."""


class InvalidRoute(SafeRouteError):
    """Route unusable for scoring, selection or monitoring."""


class NoRoutesAvailable(SafeRouteError):
    """The directions provider produced no usable route."""


class DirectionsServiceError(ConnectionError):
    """The directions provider could not be reached after retries."""
