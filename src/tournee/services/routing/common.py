"""Helpers shared by the route planners."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ...models.domain import Stop
from ..timing.traffic import round_half_up
from .models import RouteStats, RouteStop


def valid_stops(stops: Iterable[Stop]) -> list[Stop]:
    """Keep the stops that carry a destination, preserving input order."""

    return [stop for stop in stops if stop.destination is not None]


def summarize(
    route: Sequence[RouteStop],
    *,
    now: Optional[datetime] = None,
    traffic_multiplier: Optional[float] = None,
) -> RouteStats:
    total_distance = sum(item.distance_from_prev_km for item in route)
    total_minutes = sum(item.total_min for item in route)
    average = round_half_up(total_minutes / len(route)) if route else 0
    completion = None
    if now is not None and math.isfinite(total_minutes):
        completion = now + timedelta(minutes=total_minutes)
    return RouteStats(
        stop_count=len(route),
        total_distance_km=total_distance,
        total_duration_min=total_minutes,
        average_min_per_stop=average,
        estimated_completion=completion,
        traffic_multiplier=traffic_multiplier,
    )
