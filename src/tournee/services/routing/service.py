"""Routing orchestration service."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ...config import settings
from ...data.missions_repository import stop_from_record
from ...models.domain import Coordinate, Stop
from ...persistence.database import get_active_missions
from ...schemas.routing import (
    CoordinateModel,
    IntervenantRoutingRequest,
    RouteStatsModel,
    RouteStopModel,
    RoutingRequest,
    RoutingResponse,
    StopModel,
)
from ..clock import resolve_now
from .clustered import plan_clustered
from .models import RoutePlan
from .nearest import plan_nearest_first

PLANNING_MODES = ("nearest", "clustered")


def _to_stop(model: StopModel) -> Stop:
    destination = None
    if model.latitude is not None and model.longitude is not None:
        destination = Coordinate(latitude=model.latitude, longitude=model.longitude)
    return Stop(
        stop_id=model.id,
        destination=destination,
        item_count=model.item_count,
        status=model.status,
        time_band=model.time_band,
        estimated_value=model.estimated_value,
        address=model.address,
    )


def _to_coordinate(model: CoordinateModel) -> Coordinate:
    return Coordinate(latitude=model.latitude, longitude=model.longitude)


def plan_stops(
    origin: Coordinate,
    stops: Sequence[Stop],
    *,
    mode: str,
    now: datetime,
    cluster_size: Optional[int] = None,
    speed_kmh: Optional[float] = None,
) -> RoutePlan:
    if mode not in PLANNING_MODES:
        raise ValueError(f"Unknown planning mode '{mode}'. Expected one of: {', '.join(PLANNING_MODES)}.")

    if mode == "nearest":
        return plan_nearest_first(origin, stops, speed_kmh=speed_kmh or settings.eta_speed_kmh)
    return plan_clustered(origin, stops, now, cluster_size=cluster_size)


def _to_response(plan: RoutePlan, *, submitted: int, now: datetime) -> RoutingResponse:
    excluded = submitted - plan.stats.stop_count
    if excluded:
        logging.info(f"{excluded} of {submitted} stops have no delivery coordinates and were left out of the route")

    return RoutingResponse(
        mode=plan.mode,
        warnings=plan.warnings,
        stops=[
            RouteStopModel(
                stop_id=item.stop.stop_id,
                sequence=item.sequence,
                cluster=item.cluster,
                address=item.stop.address,
                latitude=item.stop.destination.latitude,
                longitude=item.stop.destination.longitude,
                distance_from_prev_km=item.distance_from_prev_km,
                travel_min=item.travel_min,
                execution_min=item.execution_min,
                cumulative_distance_km=item.cumulative_distance_km,
                cumulative_min=item.cumulative_min,
            )
            for item in plan.stops
        ],
        stats=RouteStatsModel(
            stop_count=plan.stats.stop_count,
            total_distance_km=plan.stats.total_distance_km,
            total_distance_label=plan.stats.total_distance_label,
            total_duration_min=plan.stats.total_duration_min,
            average_min_per_stop=plan.stats.average_min_per_stop,
            estimated_completion=plan.stats.estimated_completion,
            traffic_multiplier=plan.stats.traffic_multiplier,
        ),
        metadata={
            "submitted_stops": submitted,
            "excluded_stops": excluded,
            "planned_at": now.isoformat(),
        },
    )


def optimize_route(payload: RoutingRequest) -> RoutingResponse:
    now = resolve_now(payload.now)
    stops = [_to_stop(model) for model in payload.stops]
    logging.info(f"Planning {len(stops)} stops in '{payload.mode}' mode")

    plan = plan_stops(
        _to_coordinate(payload.origin),
        stops,
        mode=payload.mode,
        now=now,
        cluster_size=payload.cluster_size,
        speed_kmh=payload.speed_kmh,
    )
    return _to_response(plan, submitted=len(stops), now=now)


def optimize_intervenant_route(intervenant_email: str, payload: IntervenantRoutingRequest) -> RoutingResponse:
    """Plan the runner's tour from the active missions held in the database."""

    now = resolve_now(payload.now)
    records = get_active_missions(intervenant_email)
    stops = [stop_from_record(record) for record in records]
    logging.info(f"Planning tour of {len(stops)} missions for '{intervenant_email}'")

    plan = plan_stops(
        _to_coordinate(payload.origin),
        stops,
        mode=payload.mode,
        now=now,
        cluster_size=payload.cluster_size,
    )
    response = _to_response(plan, submitted=len(stops), now=now)
    response.metadata["intervenant_email"] = intervenant_email
    return response
