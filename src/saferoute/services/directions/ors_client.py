"""HTTP client for the OpenRouteService directions API."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from ...config import settings
from ...errors import DirectionsServiceError, InvalidRoute, NoRoutesAvailable
from ...models.domain import Coordinate, Route, validate_coordinate

# Alternative route tuning passed through to the provider.
ALTERNATIVE_WEIGHT_FACTOR = 1.4
ALTERNATIVE_SHARE_FACTOR = 0.6
EXTRA_INFO = ("waytype", "steepness")

logger = logging.getLogger(__name__)


def parse_routes(payload: dict) -> list[Route]:
    """Convert an ORS GeoJSON response into routes, skipping unusable features."""

    routes: list[Route] = []
    for index, feature in enumerate(payload.get("features") or [], start=1):
        geometry = feature.get("geometry") or {}
        properties = feature.get("properties") or {}
        summary = properties.get("summary") or {}
        coordinates = [
            Coordinate(lat=float(point[1]), lon=float(point[0]))
            for point in geometry.get("coordinates") or []
            if len(point) >= 2
        ]
        distance = float(summary.get("distance") or 0.0)
        if len(coordinates) < 2 or distance <= 0:
            logger.warning(f"Skipping unusable route feature {index}: {len(coordinates)} points, distance={distance}")
            continue
        routes.append(
            Route(
                id=index,
                coordinates=coordinates,
                distance_meters=distance,
                duration_seconds=float(summary.get("duration") or 0.0),
                segments=list(properties.get("segments") or []),
            )
        )
    return routes


class DirectionsClient:
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        profile: str | None = None,
        fallback_profile: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.ors_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.ors_api_key
        if not self.api_key:
            logger.warning("ORS API key not found. Routing requests will likely be rejected.")
        self.profile = profile or settings.ors_profile
        self.fallback_profile = fallback_profile or settings.ors_fallback_profile
        self.timeout = timeout if timeout is not None else settings.ors_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.ors_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.ors_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        headers = {"Accept": "application/geo+json, application/json"}
        if self.api_key:
            headers["Authorization"] = self.api_key
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers=headers,
            transport=self._transport,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> dict:
        try:
            payload = response.json()
        except ValueError as e:
            raise DirectionsServiceError(
                f"Directions service returned a non-JSON body ({response.headers.get('content-type', 'unknown')})."
            ) from e
        if not isinstance(payload, dict):
            raise DirectionsServiceError(
                f"Directions service returned {type(payload).__name__} instead of a FeatureCollection."
            )
        return payload

    def _post_directions(self, profile: str, body: dict[str, Any]) -> dict:
        """POST a directions request, retrying transient failures.

        HTTP 4xx responses are raised immediately as ``httpx.HTTPStatusError`` so
        callers can decide on fallbacks.
        """
        url = f"{self.base_url}/v2/directions/{profile}/geojson"
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.post(url, json=body)
                    response.raise_for_status()
                    return self._decode(response)
                except httpx.HTTPStatusError as e:
                    if e.response.status_code < 500:
                        raise
                    attempt += 1
                    if attempt > self.max_retries:
                        raise DirectionsServiceError(
                            f"Directions service returned {e.response.status_code} after {attempt} attempts."
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions server error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except httpx.TransportError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise DirectionsServiceError(
                            f"Failed to reach directions service at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
        finally:
            client.close()

    def _request_routes(
        self,
        profile: str,
        start: Coordinate,
        end: Coordinate,
        *,
        alternatives: Optional[int] = None,
        minimal: bool = False,
    ) -> list[Route]:
        body: dict[str, Any] = {
            "coordinates": [[start.lon, start.lat], [end.lon, end.lat]],
            "instructions": False,
        }
        if not minimal:
            body["extra_info"] = list(EXTRA_INFO)
        if alternatives and alternatives > 1:
            body["alternative_routes"] = {
                "target_count": alternatives,
                "weight_factor": ALTERNATIVE_WEIGHT_FACTOR,
                "share_factor": ALTERNATIVE_SHARE_FACTOR,
            }
        return parse_routes(self._post_directions(profile, body))

    def _minimal_fallback(self, start: Coordinate, end: Coordinate) -> list[Route]:
        try:
            logger.warning(f"Directions request rejected: retrying {self.profile} with minimal options")
            routes = self._request_routes(self.profile, start, end, minimal=True)
            if routes:
                return routes
        except httpx.HTTPStatusError as e:
            logger.warning(f"Minimal {self.profile} attempt failed with {e.response.status_code}")
        except DirectionsServiceError as e:
            logger.warning(f"Minimal {self.profile} attempt failed: {e}")

        logger.warning(f"Directions fallback: trying {self.fallback_profile} with minimal options")
        try:
            return self._request_routes(self.fallback_profile, start, end, minimal=True)
        except httpx.HTTPStatusError as e:
            raise NoRoutesAvailable(
                f"No route found: {self.fallback_profile} fallback failed with {e.response.status_code}."
            ) from e

    def get_routes(self, start: Coordinate, end: Coordinate, alternatives: int | None = None) -> list[Route]:
        """Fetch candidate routes from ``start`` to ``end``, falling back to simpler requests."""

        validate_coordinate(start)
        validate_coordinate(end)
        if start == end:
            raise InvalidRoute("Start and destination are the same location.")

        count = alternatives if alternatives is not None else settings.alternatives_requested
        try:
            routes = self._request_routes(self.profile, start, end, alternatives=count)
            if not routes:
                logger.warning("Directions service returned no alternatives; retrying without alternatives")
                routes = self._request_routes(self.profile, start, end)
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 400:
                raise DirectionsServiceError(
                    f"Directions service rejected the request with {e.response.status_code}."
                ) from e
            routes = self._minimal_fallback(start, end)

        if not routes:
            raise NoRoutesAvailable("No route found between the selected points.")
        logger.info(f"Directions service returned {len(routes)} route(s)")
        return routes

    def check_health(self) -> bool:
        """Probe the provider with a short fixed request."""
        if not self.api_key:
            return False
        try:
            routes = self._request_routes(
                self.profile,
                Coordinate(lat=40.7580, lon=-73.9855),
                Coordinate(lat=40.7614, lon=-73.9776),
                minimal=True,
            )
            return bool(routes)
        except (httpx.HTTPError, DirectionsServiceError, ValueError):
            return False
