"""Unsafe zone catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, status

from ...models.domain import UnsafeZone
from ...schemas.routing import CoordinateModel, UnsafeZoneModel
from ...services.zones.registry import get_zone_registry

router = APIRouter(prefix="/zones", tags=["zones"])


def _to_model(zone: UnsafeZone) -> UnsafeZoneModel:
    return UnsafeZoneModel(
        id=zone.id,
        center=CoordinateModel(lat=zone.center.lat, lon=zone.center.lon),
        radius_meters=zone.radius_meters,
        severity=zone.severity.value,
        description=zone.description,
    )


@router.get("", response_model=List[UnsafeZoneModel], status_code=status.HTTP_200_OK)
def list_zones() -> List[UnsafeZoneModel]:
    return [_to_model(zone) for zone in get_zone_registry()]


@router.get("/{zone_id}", response_model=UnsafeZoneModel, status_code=status.HTTP_200_OK)
def get_zone(zone_id: str) -> UnsafeZoneModel:
    zone = get_zone_registry().get(zone_id)
    if zone is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unsafe zone '{zone_id}' not found")
    return _to_model(zone)
