"""Nearest-first route ordering for quick route display."""

from __future__ import annotations

from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, Stop
from ..geospatial import distance_km
from ..timing.execution import shopping_minutes
from ..timing.traffic import simple_eta_minutes
from .common import summarize, valid_stops
from .models import RoutePlan, RouteStop


def plan_nearest_first(
    origin: Coordinate,
    stops: Sequence[Stop],
    *,
    speed_kmh: float = settings.eta_speed_kmh,
    long_leg_km: float = settings.long_leg_threshold_km,
) -> RoutePlan:
    """Order stops by straight-line distance from ``origin``.

    The order is fixed by one sort against the starting point; legs are then
    measured between consecutive stops of that order. Legs longer than
    ``long_leg_km`` are reported as warnings without affecting the order.
    """

    candidates = valid_stops(stops)
    ordered = sorted(candidates, key=lambda stop: distance_km(origin, stop.destination))

    route: list[RouteStop] = []
    warnings: list[str] = []
    previous = origin
    cumulative_distance = 0.0
    cumulative_minutes = 0.0

    for sequence, stop in enumerate(ordered, start=1):
        leg_km = distance_km(previous, stop.destination)
        travel = simple_eta_minutes(leg_km, speed_kmh)
        execution = shopping_minutes(stop.item_count)
        cumulative_distance += leg_km
        cumulative_minutes += travel + execution

        if leg_km > long_leg_km:
            warnings.append(f"Stop {sequence}: long leg ({leg_km:.1f} km)")

        route.append(
            RouteStop(
                stop=stop,
                sequence=sequence,
                distance_from_prev_km=leg_km,
                travel_min=travel,
                execution_min=execution,
                cumulative_distance_km=cumulative_distance,
                cumulative_min=cumulative_minutes,
            )
        )
        previous = stop.destination

    return RoutePlan(mode="nearest", stops=route, stats=summarize(route), warnings=warnings)
