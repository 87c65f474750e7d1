"""Domain value objects handed to the route and ETA engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ACTIVE_STATUSES: tuple[str, ...] = ("accepted", "in_progress", "shopping", "delivering")
TIME_BANDS: tuple[str, ...] = ("morning", "afternoon", "evening")


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS84 position in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Stop:
    """One pending mission to visit.

    Only the fields read by the planners live here; display data stays with
    the caller. ``destination`` is ``None`` when the mission has no geocoded
    delivery address, in which case planners leave it out of the route.
    """

    stop_id: str
    destination: Optional[Coordinate]
    item_count: int = 0
    status: Optional[str] = None
    time_band: Optional[str] = None
    estimated_value: float = 0.0
    address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TrackingSample:
    """Latest reported position of a runner."""

    position: Coordinate
    timestamp: datetime
    speed_mps: Optional[float] = None
    heading: Optional[float] = None
    accuracy: Optional[float] = None


@dataclass(frozen=True, slots=True)
class RunnerLocation:
    user_email: str
    position: Coordinate
    user_name: Optional[str] = None
    is_available: bool = True


@dataclass(frozen=True, slots=True)
class LatenessVerdict:
    is_late: bool
    margin_minutes: float
    estimated_minutes: int
    minutes_until_deadline: float
    distance_km: float
    speed_kmh: float
