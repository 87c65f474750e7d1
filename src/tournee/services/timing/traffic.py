"""Time-of-day traffic model and travel-time estimates."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from ...config import settings

TrafficBand = Literal["peak", "moderate", "off_peak"]

# Hour sets follow the ordered range checks of the mobile app: peak 8-10,
# 12-13, 17-19 first, then moderate 10-12, 13-17, 19-21 for what is left.
PEAK_HOURS = frozenset({8, 9, 10, 12, 13, 17, 18, 19})
MODERATE_HOURS = frozenset({11, 14, 15, 16, 20, 21})

TRAFFIC_MULTIPLIERS: dict[str, float] = {
    "peak": 1.5,
    "moderate": 1.2,
    "off_peak": 0.9,
}


def round_half_up(value: float) -> int | float:
    """Round to the nearest integer, halves away from zero for positive values.

    Non-finite values are returned untouched so NaN inputs stay NaN.
    """

    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def traffic_band(now: datetime) -> TrafficBand:
    hour = now.hour
    if hour in PEAK_HOURS:
        return "peak"
    if hour in MODERATE_HOURS:
        return "moderate"
    return "off_peak"


def traffic_multiplier(now: datetime) -> float:
    """Slow-down factor applied to the base speed at the wall-clock hour of ``now``."""

    return TRAFFIC_MULTIPLIERS[traffic_band(now)]


def traffic_travel_minutes(
    distance_km: float,
    now: datetime,
    *,
    base_speed_kmh: float = settings.base_speed_kmh,
) -> int | float:
    """Travel time in whole minutes with the traffic multiplier for ``now`` applied."""

    effective_speed = base_speed_kmh / traffic_multiplier(now)
    return round_half_up(distance_km / effective_speed * 60)


def simple_eta_minutes(distance_km: float, speed_kmh: float = settings.eta_speed_kmh) -> int | float:
    """Travel time in whole minutes at a constant speed, no traffic adjustment."""

    return round_half_up(distance_km / speed_kmh * 60)
