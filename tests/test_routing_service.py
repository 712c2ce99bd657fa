import pytest

from saferoute.errors import NoRoutesAvailable
from saferoute.models.domain import Route, RouteMode
from saferoute.schemas.routing import ScoreRoutesRequest, SafeRouteRequest
from saferoute.services.routing import service as routing_service


def _request(mode: str = "safest") -> SafeRouteRequest:
    return SafeRouteRequest(
        start={"lat": 40.7580, "lon": -73.9855},
        end={"lat": 40.7829, "lon": -73.9654},
        mode=mode,
    )


def _patch_directions(monkeypatch: pytest.MonkeyPatch, routes: list[Route]) -> list[tuple]:
    calls: list[tuple] = []

    class DummyDirections:
        profile = "foot-walking"

        def get_routes(self, start, end, alternatives=None):
            calls.append((start, end, alternatives))
            return routes

    monkeypatch.setattr(routing_service, "DirectionsClient", lambda: DummyDirections())
    return calls


def test_plan_safe_route_recommends_safest(monkeypatch: pytest.MonkeyPatch, midtown_routes: list[Route]) -> None:
    calls = _patch_directions(monkeypatch, midtown_routes)

    response = routing_service.plan_safe_route(_request())

    assert calls[0][2] is None
    assert response.mode is RouteMode.SAFEST
    assert response.recommended_route_id == 3
    assert [route.recommended for route in response.routes] == [False, False, True]
    first = response.routes[0]
    assert first.distance_text == "2.80 km"
    assert first.duration_text == "35 min"
    assert first.exposures[0].zone_id == "uz1"

    overlays = response.metadata["map_overlays"]
    assert len(overlays["routes"]) == 3
    assert len(overlays["zones"]) == 6
    assert overlays["routes"][2]["recommended"] is True


def test_plan_safe_route_shortest_mode(monkeypatch: pytest.MonkeyPatch, midtown_routes: list[Route]) -> None:
    _patch_directions(monkeypatch, midtown_routes)

    response = routing_service.plan_safe_route(_request("shortest"))

    assert response.recommended_route_id == 2


def test_plan_safe_route_propagates_no_routes(monkeypatch: pytest.MonkeyPatch) -> None:
    class EmptyDirections:
        profile = "foot-walking"

        def get_routes(self, start, end, alternatives=None):
            raise NoRoutesAvailable("No route found between the selected points.")

    monkeypatch.setattr(routing_service, "DirectionsClient", lambda: EmptyDirections())

    with pytest.raises(NoRoutesAvailable):
        routing_service.plan_safe_route(_request())


def test_score_candidate_routes_without_provider(midtown_routes: list[Route]) -> None:
    payload = ScoreRoutesRequest(
        routes=[
            {
                "id": route.id,
                "coordinates": [{"lat": point.lat, "lon": point.lon} for point in route.coordinates],
                "distance_meters": route.distance_meters,
                "duration_seconds": route.duration_seconds,
            }
            for route in midtown_routes
        ],
        mode="safest",
    )

    response = routing_service.score_candidate_routes(payload)

    assert response.recommended_route_id == 3
    assert response.metadata["source"] == "request"
    assert all(0 <= route.safety_score <= 100 for route in response.routes)
