"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Coordinate, RouteMode


class CoordinateModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)


class SafeRouteRequest(BaseModel):
    start: CoordinateModel
    end: CoordinateModel
    mode: RouteMode = RouteMode.SAFEST
    alternatives: Optional[int] = Field(
        default=None,
        ge=1,
        description="Alternative routes to request. Defaults to the configured value.",
    )


class CandidateRouteModel(BaseModel):
    """Route geometry supplied by the caller, e.g. from its own directions provider."""

    id: int
    coordinates: List[CoordinateModel] = Field(..., min_length=2)
    distance_meters: float = Field(..., gt=0)
    duration_seconds: float = Field(default=0.0, ge=0)


class ScoreRoutesRequest(BaseModel):
    routes: List[CandidateRouteModel] = Field(..., min_length=1)
    mode: RouteMode = RouteMode.SAFEST

    @field_validator("routes")
    @classmethod
    def check_unique_ids(cls, routes: List[CandidateRouteModel]) -> List[CandidateRouteModel]:
        seen: set[int] = set()
        for route in routes:
            if route.id in seen:
                raise ValueError(f"Duplicate route id {route.id}")
            seen.add(route.id)
        return routes


class ZoneExposureModel(BaseModel):
    zone_id: str
    severity: str
    points_inside: int
    danger: float


class SafetyRatingModel(BaseModel):
    label: str
    tier: str
    color: str


class ScoredRouteModel(BaseModel):
    id: int
    distance_meters: float
    duration_seconds: float
    safety_score: int = Field(..., ge=0, le=100)
    distance_text: str
    duration_text: str
    rating: SafetyRatingModel
    exposures: List[ZoneExposureModel]
    coordinates: List[CoordinateModel]
    recommended: bool = False


class SafeRouteResponse(BaseModel):
    mode: RouteMode
    recommended_route_id: int
    routes: List[ScoredRouteModel]
    metadata: dict


class DeviationRequest(BaseModel):
    position: CoordinateModel
    route: List[CoordinateModel] = Field(..., min_length=1)
    threshold_meters: Optional[float] = Field(default=None, gt=0)


class DeviationResponse(BaseModel):
    distance_from_route_meters: float
    off_route: bool
    threshold_meters: float


class UnsafeZoneModel(BaseModel):
    id: str
    center: CoordinateModel
    radius_meters: float
    severity: str
    description: str
