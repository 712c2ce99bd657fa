"""Unsafe zone catalog, built in or loaded from a JSON file."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ...config import settings
from ...models.domain import Coordinate, Severity, UnsafeZone

logger = logging.getLogger(__name__)


UNSAFE_ZONES: tuple[UnsafeZone, ...] = (
    UnsafeZone(
        id="uz1",
        center=Coordinate(lat=40.7580, lon=-73.9855),
        radius_meters=200,
        severity=Severity.HIGH,
        description="High crime area - frequent incidents reported",
    ),
    UnsafeZone(
        id="uz2",
        center=Coordinate(lat=40.7520, lon=-73.9780),
        radius_meters=150,
        severity=Severity.MEDIUM,
        description="Poorly lit area at night",
    ),
    UnsafeZone(
        id="uz3",
        center=Coordinate(lat=40.7650, lon=-73.9700),
        radius_meters=100,
        severity=Severity.LOW,
        description="Isolated area with limited foot traffic",
    ),
    UnsafeZone(
        id="uz4",
        center=Coordinate(lat=40.7480, lon=-73.9920),
        radius_meters=180,
        severity=Severity.HIGH,
        description="Multiple harassment incidents reported",
    ),
    UnsafeZone(
        id="uz5",
        center=Coordinate(lat=40.7700, lon=-73.9600),
        radius_meters=120,
        severity=Severity.MEDIUM,
        description="Construction area with limited visibility",
    ),
    UnsafeZone(
        id="uz6",
        center=Coordinate(lat=40.7550, lon=-73.9650),
        radius_meters=90,
        severity=Severity.LOW,
        description="Narrow streets with minimal lighting",
    ),
)


class UnsafeZoneRegistry:
    """Ordered, read-only collection of unsafe zones."""

    def __init__(self, zones: Iterable[UnsafeZone]) -> None:
        self._zones = tuple(zones)
        self._by_id: dict[str, UnsafeZone] = {}
        for zone in self._zones:
            if zone.id in self._by_id:
                raise ValueError(f"Duplicate unsafe zone id '{zone.id}'.")
            self._by_id[zone.id] = zone

    def __iter__(self) -> Iterator[UnsafeZone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    @property
    def zones(self) -> tuple[UnsafeZone, ...]:
        return self._zones

    def get(self, zone_id: str) -> Optional[UnsafeZone]:
        return self._by_id.get(zone_id)


def _zone_from_record(record: dict) -> UnsafeZone:
    return UnsafeZone(
        id=str(record["id"]),
        center=Coordinate(lat=float(record["latitude"]), lon=float(record["longitude"])),
        radius_meters=float(record["radius"]),
        severity=Severity(str(record["severity"]).lower()),
        description=str(record.get("description", "")),
    )


def load_zones_from_file(source: Path) -> tuple[UnsafeZone, ...]:
    """Load unsafe zones from a JSON array of ``{id, latitude, longitude, radius, severity, description}``."""
    if not source.exists():
        raise FileNotFoundError(f"Unsafe zone catalog not found: {source}")

    with source.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError(f"Unsafe zone catalog '{source}' must contain a JSON array.")

    zones: list[UnsafeZone] = []
    for index, record in enumerate(payload):
        try:
            zones.append(_zone_from_record(record))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid unsafe zone at index {index} in '{source}': {exc}") from exc
    return tuple(zones)


@lru_cache(maxsize=1)
def get_zone_registry() -> UnsafeZoneRegistry:
    if settings.unsafe_zones_file is not None:
        zones = load_zones_from_file(settings.unsafe_zones_file)
        logger.info(f"Loaded {len(zones)} unsafe zones from {settings.unsafe_zones_file}")
        return UnsafeZoneRegistry(zones)
    return UnsafeZoneRegistry(UNSAFE_ZONES)
