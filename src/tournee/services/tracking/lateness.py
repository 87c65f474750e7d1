"""Lateness detection from a single tracking sample."""

from __future__ import annotations

import enum
from datetime import datetime

from ...config import settings
from ...models.domain import Coordinate, LatenessVerdict, TrackingSample
from ..geospatial import distance_km
from ..timing.traffic import round_half_up

MPS_TO_KMH = 3.6


class LatenessTransition(str, enum.Enum):
    BECAME_LATE = "became_late"
    RECOVERED = "recovered"
    UNCHANGED = "unchanged"


def effective_speed_kmh(sample: TrackingSample, default_speed_kmh: float = settings.tracking_speed_kmh) -> float:
    """Reported speed converted to km/h, or the default when absent or not positive."""

    if sample.speed_mps is not None and sample.speed_mps > 0:
        return sample.speed_mps * MPS_TO_KMH
    return default_speed_kmh


def assess_lateness(
    sample: TrackingSample,
    destination: Coordinate,
    scheduled_time: datetime,
    now: datetime,
    *,
    default_speed_kmh: float = settings.tracking_speed_kmh,
    grace_minutes: float = settings.lateness_grace_minutes,
) -> LatenessVerdict:
    """Project arrival from ``sample`` and compare it with ``scheduled_time``.

    The runner is late when the estimated travel time exceeds the minutes left
    before the deadline plus the grace tolerance. The margin is positive while
    on time and negative by the number of minutes late.
    """

    distance = distance_km(sample.position, destination)
    speed = effective_speed_kmh(sample, default_speed_kmh)
    estimated = round_half_up(distance / speed * 60)
    minutes_until_deadline = (scheduled_time - now).total_seconds() / 60
    margin = minutes_until_deadline + grace_minutes - estimated
    return LatenessVerdict(
        is_late=estimated > minutes_until_deadline + grace_minutes,
        margin_minutes=margin,
        estimated_minutes=estimated,
        minutes_until_deadline=minutes_until_deadline,
        distance_km=distance,
        speed_kmh=speed,
    )


def classify_transition(was_late: bool, verdict: LatenessVerdict) -> LatenessTransition:
    if verdict.is_late and not was_late:
        return LatenessTransition.BECAME_LATE
    if was_late and not verdict.is_late:
        return LatenessTransition.RECOVERED
    return LatenessTransition.UNCHANGED
