"""Safe routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...errors import DirectionsServiceError, NoRoutesAvailable
from ...schemas.routing import (
    DeviationRequest,
    DeviationResponse,
    SafeRouteRequest,
    SafeRouteResponse,
    ScoreRoutesRequest,
)
from ...services.export.geojson import routes_to_feature_collection
from ...services.geospatial import distance_to_route
from ...services.routing.service import fetch_scored_routes, plan_safe_route, score_candidate_routes
from ...services.scoring.selection import select_best
from ...services.zones.registry import get_zone_registry

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/plan", response_model=SafeRouteResponse, status_code=status.HTTP_200_OK)
def plan(payload: SafeRouteRequest) -> SafeRouteResponse:
    try:
        return plan_safe_route(payload)
    except NoRoutesAvailable as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DirectionsServiceError as exc:
        logging.warning(f"Directions provider unavailable: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error planning safe route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan route: {str(exc)}",
        ) from exc


@router.post("/plan/geojson", status_code=status.HTTP_200_OK)
def plan_geojson(payload: SafeRouteRequest) -> dict:
    """Same as ``/plan`` but returns a GeoJSON FeatureCollection for map layers."""
    try:
        routes = fetch_scored_routes(
            payload.start.to_domain(),
            payload.end.to_domain(),
            alternatives=payload.alternatives,
        )
        best = select_best(routes, payload.mode)
        return routes_to_feature_collection(
            routes,
            get_zone_registry().zones,
            recommended_route_id=best.id,
        )
    except NoRoutesAvailable as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DirectionsServiceError as exc:
        logging.warning(f"Directions provider unavailable: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error building route GeoJSON: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to build route GeoJSON: {str(exc)}",
        ) from exc


@router.post("/score", response_model=SafeRouteResponse, status_code=status.HTTP_200_OK)
def score(payload: ScoreRoutesRequest) -> SafeRouteResponse:
    try:
        return score_candidate_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/deviation", response_model=DeviationResponse, status_code=status.HTTP_200_OK)
def deviation(payload: DeviationRequest) -> DeviationResponse:
    threshold = payload.threshold_meters or settings.off_route_threshold_meters
    distance = distance_to_route(
        payload.position.to_domain(),
        [point.to_domain() for point in payload.route],
    )
    return DeviationResponse(
        distance_from_route_meters=round(distance, 2),
        off_route=distance > threshold,
        threshold_meters=threshold,
    )
