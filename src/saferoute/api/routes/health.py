"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_directions_client():
    """Lazy import to avoid startup failures."""
    from ...services.directions.ors_client import DirectionsClient
    return DirectionsClient()


@router.get("/health/directions", status_code=status.HTTP_200_OK)
def health_directions() -> dict:
    """Check directions provider health."""
    try:
        client = _get_directions_client()
        return {"service": "directions", "profile": client.profile, "healthy": client.check_health()}
    except Exception as e:
        return {"service": "directions", "healthy": False, "error": str(e)}
