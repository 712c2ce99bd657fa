"""Periodic route deviation monitor."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

from ...config import settings
from ...errors import InvalidRoute
from ...models.domain import Coordinate, RouteDeviation
from ..geospatial import distance_to_route

logger = logging.getLogger(__name__)

DeviationCallback = Callable[[RouteDeviation], None]
PositionSource = Callable[[], Coordinate]

SIMULATED_DEVIATION_PROBABILITY = 0.3
SIMULATED_DEVIATION_RANGE_METERS = (50.0, 200.0)


class DeviationModel(Protocol):
    def measure(self, route: Sequence[Coordinate], index: int) -> float:
        """Return the current distance from ``route`` in meters."""


class SimulatedDeviationModel:
    """Demo readings: occasionally report a random drift, otherwise on route."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        probability: float = SIMULATED_DEVIATION_PROBABILITY,
        range_meters: tuple[float, float] = SIMULATED_DEVIATION_RANGE_METERS,
    ) -> None:
        self._rng = rng or random.Random()
        self._probability = probability
        self._low, self._high = range_meters

    def measure(self, route: Sequence[Coordinate], index: int) -> float:
        if self._rng.random() < self._probability:
            return self._rng.uniform(self._low, self._high)
        return 0.0


class ProximityDeviationModel:
    """Readings from a live position feed against the route vertices."""

    def __init__(self, position_source: PositionSource) -> None:
        self._position_source = position_source

    def measure(self, route: Sequence[Coordinate], index: int) -> float:
        return distance_to_route(self._position_source(), route)


@dataclass(slots=True)
class _Session:
    route: tuple[Coordinate, ...]
    on_deviation: DeviationCallback
    cursor: int = 0
    task: Optional[asyncio.Task] = None


class RouteDeviationMonitor:
    """Tracks a position against an active route on a fixed tick.

    A monitor holds at most one session. Starting while running replaces the
    current session and stopping while idle does nothing. Sessions run as an
    asyncio task, so ``start_simulation`` must be called with a running loop.
    """

    def __init__(
        self,
        *,
        tick_period_ms: Optional[int] = None,
        off_route_threshold_meters: Optional[float] = None,
        loop_route: Optional[bool] = None,
        position_source: Optional[PositionSource] = None,
        deviation_model: Optional[DeviationModel] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        period_ms = tick_period_ms if tick_period_ms is not None else settings.tick_period_ms
        if period_ms <= 0:
            raise ValueError("tick_period_ms must be > 0")
        self._tick_seconds = period_ms / 1000
        self._threshold = (
            off_route_threshold_meters
            if off_route_threshold_meters is not None
            else settings.off_route_threshold_meters
        )
        self._loop_route = settings.loop_route if loop_route is None else loop_route
        if deviation_model is not None:
            self._model: DeviationModel = deviation_model
        elif position_source is not None:
            self._model = ProximityDeviationModel(position_source)
        else:
            self._model = SimulatedDeviationModel(rng=rng)
        self._session: Optional[_Session] = None

    def is_running(self) -> bool:
        return self._session is not None

    @property
    def current_index(self) -> Optional[int]:
        return self._session.cursor if self._session else None

    @property
    def route(self) -> Optional[tuple[Coordinate, ...]]:
        return self._session.route if self._session else None

    def start_simulation(self, route: Sequence[Coordinate], on_deviation: DeviationCallback) -> None:
        coordinates = tuple(route)
        if not coordinates:
            raise InvalidRoute("Cannot monitor an empty route.")

        self.stop_simulation()
        session = _Session(route=coordinates, on_deviation=on_deviation)
        self._session = session
        session.task = asyncio.get_running_loop().create_task(self._run(session))
        logger.info(
            f"Route monitor started: {len(coordinates)} points, tick={self._tick_seconds:.3f}s, loop={self._loop_route}"
        )

    def stop_simulation(self) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        if session.task is not None and not session.task.done():
            session.task.cancel()
        logger.info("Route monitor stopped")

    async def close(self) -> None:
        """Stop the active session and wait for its task to finish."""
        session = self._session
        self.stop_simulation()
        if session is not None and session.task is not None:
            try:
                await session.task
            except asyncio.CancelledError:
                pass

    async def _run(self, session: _Session) -> None:
        while self._session is session:
            await asyncio.sleep(self._tick_seconds)
            if self._session is not session:
                return
            if not self._advance(session):
                self._session = None
                logger.info("Route monitor reached the destination")
                return
            self._tick(session)

    def _advance(self, session: _Session) -> bool:
        next_index = session.cursor + 1
        if next_index >= len(session.route):
            if not self._loop_route:
                return False
            next_index = 0
        session.cursor = next_index
        return True

    def _tick(self, session: _Session) -> None:
        try:
            distance = self._model.measure(session.route, session.cursor)
            session.on_deviation(
                RouteDeviation(
                    distance_from_route_meters=distance,
                    off_route=distance > self._threshold,
                )
            )
        except Exception:
            logger.exception(f"Route monitor tick failed at index {session.cursor}; skipping")
