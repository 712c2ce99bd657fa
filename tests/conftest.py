import pytest

from saferoute.models.domain import Coordinate, Route

START = Coordinate(lat=40.7580, lon=-73.9855)
END = Coordinate(lat=40.7829, lon=-73.9654)
# clear of every reference zone
MIDPOINT = Coordinate(lat=40.7700, lon=-73.9800)


def _midtown_route(route_id: int, north_offset_deg: float, distance: float, duration: float) -> Route:
    """Route leaving uz1's center and passing it again ``north_offset_deg`` to the north."""
    return Route(
        id=route_id,
        coordinates=[
            START,
            Coordinate(lat=START.lat + north_offset_deg, lon=START.lon),
            MIDPOINT,
            END,
        ],
        distance_meters=distance,
        duration_seconds=duration,
    )


@pytest.fixture
def midtown_routes() -> list[Route]:
    # second points sit roughly 50 m, 100 m and 180 m from uz1 (radius 200 m)
    return [
        _midtown_route(1, 0.00045, 2800, 2100),
        _midtown_route(2, 0.0009, 2500, 1900),
        _midtown_route(3, 0.00162, 2650, 2000),
    ]


@pytest.fixture(autouse=True)
def clear_zone_registry_cache():
    from saferoute.services.zones.registry import get_zone_registry

    get_zone_registry.cache_clear()
    yield
    get_zone_registry.cache_clear()
