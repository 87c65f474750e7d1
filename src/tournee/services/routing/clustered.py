"""Clustered, priority-weighted greedy route construction.

Stops are first grouped into nearest-neighbour clusters. Each cluster is then
routed greedily: from the running position and simulated clock, the next stop
is the one maximising ``priority - weight * (travel + execution)``, where
travel time is traffic-adjusted at the simulated clock. Clusters are chained
in generation order, each one continuing from where the previous ended.

The running position, clock and route so far are carried in an immutable
``PlannerState``; ``advance`` is the single step of the fold.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import reduce
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import Coordinate, Stop
from ..geospatial import distance_km
from ..timing.execution import mission_execution_minutes
from ..timing.traffic import traffic_multiplier, traffic_travel_minutes
from .common import summarize, valid_stops
from .models import RoutePlan, RouteStop

STATUS_PRIORITY: dict[str, float] = {
    "in_progress": 100,
    "shopping": 80,
    "accepted": 50,
}
TIME_BAND_PRIORITY: dict[str, float] = {
    "morning": 40,
    "afternoon": 25,
    "evening": 10,
}
VALUE_WEIGHT = 0.2
ITEM_WEIGHT = 2


def priority_score(stop: Stop) -> float:
    """Higher means more important."""

    return (
        STATUS_PRIORITY.get(stop.status or "", 0)
        + TIME_BAND_PRIORITY.get(stop.time_band or "", 0)
        + VALUE_WEIGHT * (stop.estimated_value or 0)
        + ITEM_WEIGHT * stop.item_count
    )


def cluster_stops(stops: Sequence[Stop], cluster_size: int) -> list[list[Stop]]:
    """Group stops around seeds taken in input order.

    Each seed takes the ``cluster_size - 1`` nearest stops not yet assigned;
    equal distances keep input order. Every stop lands in exactly one
    cluster. ``stops`` must all carry a destination.
    """

    size = max(1, cluster_size)
    used: set[int] = set()
    clusters: list[list[Stop]] = []

    for index, seed in enumerate(stops):
        if index in used:
            continue
        used.add(index)
        remaining = [idx for idx in range(len(stops)) if idx not in used]
        nearest = sorted(
            remaining,
            key=lambda idx: distance_km(seed.destination, stops[idx].destination),
        )[: size - 1]
        used.update(nearest)
        clusters.append([seed, *(stops[idx] for idx in nearest)])

    return clusters


@dataclass(frozen=True, slots=True)
class PlannerState:
    position: Coordinate
    clock: datetime
    legs: tuple[RouteStop, ...] = ()


def _leg_minutes(state: PlannerState, stop: Stop) -> tuple[float, float, float]:
    leg_km = distance_km(state.position, stop.destination)
    travel = traffic_travel_minutes(leg_km, state.clock)
    execution = mission_execution_minutes(stop.item_count)
    return leg_km, travel, execution


def advance(state: PlannerState, stop: Stop, cluster: Optional[int] = None) -> PlannerState:
    """Visit ``stop``: append its leg, move there and push the clock forward."""

    leg_km, travel, execution = _leg_minutes(state, stop)
    previous = state.legs[-1] if state.legs else None
    leg = RouteStop(
        stop=stop,
        sequence=len(state.legs) + 1,
        distance_from_prev_km=leg_km,
        travel_min=travel,
        execution_min=execution,
        cumulative_distance_km=(previous.cumulative_distance_km if previous else 0.0) + leg_km,
        cumulative_min=(previous.cumulative_min if previous else 0.0) + travel + execution,
        cluster=cluster,
    )
    elapsed = travel + execution
    # NaN legs stay in the route; the clock only moves by finite amounts
    clock = state.clock + timedelta(minutes=elapsed) if math.isfinite(elapsed) else state.clock
    return PlannerState(position=stop.destination, clock=clock, legs=(*state.legs, leg))


def select_next(
    state: PlannerState,
    candidates: Sequence[Stop],
    *,
    time_weight: float = settings.priority_time_weight,
) -> int:
    """Index of the best candidate from ``state``; the first one wins ties."""

    best_index = 0
    best_score = -math.inf
    for index, stop in enumerate(candidates):
        _, travel, execution = _leg_minutes(state, stop)
        score = priority_score(stop) - time_weight * (travel + execution)
        if score > best_score:
            best_score = score
            best_index = index
    return best_index


def route_cluster(
    state: PlannerState,
    cluster: Sequence[Stop],
    cluster_index: Optional[int] = None,
    *,
    time_weight: float = settings.priority_time_weight,
) -> PlannerState:
    remaining = list(cluster)
    while remaining:
        chosen = remaining.pop(select_next(state, remaining, time_weight=time_weight))
        state = advance(state, chosen, cluster_index)
    return state


def plan_clustered(
    origin: Coordinate,
    stops: Sequence[Stop],
    now: datetime,
    *,
    cluster_size: Optional[int] = None,
    time_weight: float = settings.priority_time_weight,
) -> RoutePlan:
    """Build the full optimised route starting at ``origin`` at wall-clock ``now``.

    ``cluster_size`` defaults to half the number of valid stops, rounded up.
    """

    candidates = valid_stops(stops)
    size = cluster_size if cluster_size is not None else math.ceil(len(candidates) / 2)
    clusters = cluster_stops(candidates, size) if candidates else []

    final_state = reduce(
        lambda state, numbered: route_cluster(state, numbered[1], numbered[0], time_weight=time_weight),
        enumerate(clusters, start=1),
        PlannerState(position=origin, clock=now),
    )
    route = list(final_state.legs)
    stats = summarize(route, now=now, traffic_multiplier=traffic_multiplier(now))
    return RoutePlan(mode="clustered", stops=route, stats=stats)
