import random

import pytest

from saferoute.errors import InvalidRoute
from saferoute.models.domain import Coordinate, Route, Severity, UnsafeZone
from saferoute.services.scoring.scorer import calculate_safety_score, score_routes, zone_exposure
from saferoute.services.zones.registry import UNSAFE_ZONES

ZONE_CENTER = Coordinate(lat=40.7580, lon=-73.9855)


def _zone(severity: Severity) -> UnsafeZone:
    return UnsafeZone(id="z", center=ZONE_CENTER, radius_meters=200, severity=severity)


def _route(points: list[Coordinate], distance: float = 10_000, route_id: int = 1) -> Route:
    return Route(id=route_id, coordinates=points, distance_meters=distance, duration_seconds=600)


def test_route_far_from_all_zones_scores_100() -> None:
    seoul = _route([Coordinate(lat=37.5665, lon=126.9780), Coordinate(lat=37.4979, lon=127.0276)])
    assert calculate_safety_score(seoul, UNSAFE_ZONES) == 100


def test_route_without_zones_scores_100() -> None:
    route = _route([ZONE_CENTER, Coordinate(lat=40.7600, lon=-73.9855)])
    assert calculate_safety_score(route, []) == 100


def test_danger_formula_at_zone_center() -> None:
    # one point at the center of a high zone: danger 30 over 1 km -> 100 - 30 * 5 = clamp 0
    route = _route([ZONE_CENTER, Coordinate(lat=41.0, lon=-73.0)], distance=1000)
    assert calculate_safety_score(route, [_zone(Severity.HIGH)]) == 0

    # same point on a 10 km route: 30 / 10 * 5 = 15 -> 85
    route = _route([ZONE_CENTER, Coordinate(lat=41.0, lon=-73.0)], distance=10_000)
    assert calculate_safety_score(route, [_zone(Severity.HIGH)]) == 85


def test_points_outside_zone_produce_no_exposure() -> None:
    exposures = zone_exposure(
        _route([Coordinate(lat=40.0, lon=-70.0), Coordinate(lat=41.0, lon=-70.0)]),
        [_zone(Severity.HIGH)],
    )
    assert exposures == []


def test_higher_severity_lowers_score() -> None:
    inside = Coordinate(lat=ZONE_CENTER.lat + 0.00045, lon=ZONE_CENTER.lon)
    route = _route([inside, Coordinate(lat=41.0, lon=-73.0)])

    low = calculate_safety_score(route, [_zone(Severity.LOW)])
    medium = calculate_safety_score(route, [_zone(Severity.MEDIUM)])
    high = calculate_safety_score(route, [_zone(Severity.HIGH)])

    assert low > medium > high


def test_scores_are_bounded_integers() -> None:
    rng = random.Random(7)
    for route_id in range(25):
        points = [
            Coordinate(lat=40.745 + rng.random() * 0.03, lon=-73.995 + rng.random() * 0.04)
            for _ in range(rng.randint(2, 40))
        ]
        route = _route(points, distance=rng.uniform(50, 5000), route_id=route_id)
        score = calculate_safety_score(route, UNSAFE_ZONES)
        assert isinstance(score, int)
        assert 0 <= score <= 100


def test_route_with_single_point_is_invalid() -> None:
    with pytest.raises(InvalidRoute):
        calculate_safety_score(_route([ZONE_CENTER]), UNSAFE_ZONES)


def test_route_with_zero_distance_is_invalid() -> None:
    route = _route([ZONE_CENTER, ZONE_CENTER], distance=0)
    with pytest.raises(InvalidRoute):
        calculate_safety_score(route, UNSAFE_ZONES)


def test_score_routes_returns_scored_copies(midtown_routes: list[Route]) -> None:
    scored = score_routes(midtown_routes, UNSAFE_ZONES)

    assert [route.id for route in scored] == [1, 2, 3]
    assert all(route.safety_score is not None for route in scored)
    assert all(route.safety_score is None for route in midtown_routes)


def test_route_passing_farthest_from_uz1_scores_highest(midtown_routes: list[Route]) -> None:
    scores = {route.id: route.safety_score for route in score_routes(midtown_routes, UNSAFE_ZONES)}

    assert scores[3] > scores[2]
    assert scores[3] > scores[1]
    assert max(scores.values()) < 100


def test_zone_exposure_reports_only_uz1(midtown_routes: list[Route]) -> None:
    exposures = zone_exposure(midtown_routes[0], UNSAFE_ZONES)

    assert [exposure.zone_id for exposure in exposures] == ["uz1"]
    assert exposures[0].points_inside == 2
    assert exposures[0].severity == "high"


def test_overlapping_zones_accumulate_per_point() -> None:
    # both points sit at the shared center: (10 + 20) * 2 = 60 over 10 km -> 100 - 30 = 70
    zones = [
        UnsafeZone(id="a", center=ZONE_CENTER, radius_meters=200, severity=Severity.LOW),
        UnsafeZone(id="b", center=ZONE_CENTER, radius_meters=200, severity=Severity.MEDIUM),
    ]
    route = _route([ZONE_CENTER, ZONE_CENTER])

    assert calculate_safety_score(route, zones) == 70
    assert calculate_safety_score(route, (zone for zone in zones)) == 70
