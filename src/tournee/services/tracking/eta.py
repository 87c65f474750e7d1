"""Arrival estimate towards the runner's next mission."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from ...config import settings
from ...models.domain import ACTIVE_STATUSES, Coordinate, Stop
from ..geospatial import bearing_degrees, distance_km
from ..timing.traffic import simple_eta_minutes

Proximity = Literal["very_close", "close", "far"]


@dataclass(slots=True)
class NextStopEta:
    stop: Stop
    distance_km: float
    eta_minutes: float
    proximity: Proximity
    bearing_deg: float


def proximity_band(
    distance: float,
    *,
    very_close_km: float = settings.very_close_km,
    close_km: float = settings.close_km,
) -> Proximity:
    if distance < very_close_km:
        return "very_close"
    if distance < close_km:
        return "close"
    return "far"


def next_active_stop(stops: Sequence[Stop]) -> Optional[Stop]:
    """First stop, in the given order, whose status is still active."""

    for stop in stops:
        if stop.status in ACTIVE_STATUSES:
            return stop
    return None


def estimate_next_stop(
    position: Coordinate,
    stops: Sequence[Stop],
    *,
    speed_kmh: float = settings.eta_speed_kmh,
) -> Optional[NextStopEta]:
    """ETA to the next active stop, or None when it has no destination."""

    stop = next_active_stop(stops)
    if stop is None or stop.destination is None:
        return None
    distance = distance_km(position, stop.destination)
    return NextStopEta(
        stop=stop,
        distance_km=distance,
        eta_minutes=simple_eta_minutes(distance, speed_kmh),
        proximity=proximity_band(distance),
        bearing_deg=bearing_degrees(position, stop.destination),
    )
