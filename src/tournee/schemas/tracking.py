"""Tracking request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional, Tuple

from pydantic import BaseModel, Field

from .routing import CoordinateModel


class TrackingSampleModel(BaseModel):
    latitude: float
    longitude: float
    speed: Optional[float] = Field(default=None, description="Instantaneous speed in metres per second.")
    heading: Optional[float] = None
    accuracy: Optional[float] = None
    timestamp: Optional[datetime] = None


class LatenessRequest(BaseModel):
    sample: TrackingSampleModel
    destination: CoordinateModel
    scheduled_time: datetime
    now: Optional[datetime] = None
    was_late: bool = Field(default=False, description="Verdict of the previous tick, used to report the transition.")


class LatenessResponse(BaseModel):
    is_late: bool
    margin_minutes: float
    estimated_minutes: float
    minutes_until_deadline: float
    distance_km: float
    speed_kmh: float
    transition: str


class MissionLatenessResponse(BaseModel):
    mission_id: str
    previous_status: Optional[str] = None
    verdict: LatenessResponse
    marked_late: bool = False
    notified: bool = False


class NextMissionRequest(BaseModel):
    intervenant_email: str
    position: CoordinateModel


class NextMissionResponse(BaseModel):
    mission_id: str
    status: Optional[str] = None
    address: Optional[str] = None
    distance_km: float
    eta_minutes: float
    proximity: str
    bearing_deg: float = Field(description="Initial compass bearing from the runner to the delivery address.")


class GeofenceZoneModel(BaseModel):
    zone_id: str
    name: str
    center: Optional[CoordinateModel] = None
    radius_m: float = Field(default=0.0, ge=0.0)
    polygon: Optional[Annotated[List[Tuple[float, float]], Field(min_length=3)]] = Field(
        default=None,
        description="At least three polygon vertices as (lat, lon) pairs. Takes precedence over center/radius.",
    )


class RunnerLocationModel(BaseModel):
    user_email: str
    user_name: Optional[str] = None
    latitude: float
    longitude: float
    is_available: bool = True


class GeofenceRequest(BaseModel):
    locations: Optional[List[RunnerLocationModel]] = Field(
        default=None,
        description="Runner positions to check. When omitted, available runners are loaded from the database.",
    )
    zones: Optional[List[GeofenceZoneModel]] = Field(default=None, description="Defaults to the built-in city zones.")


class GeofenceAlertModel(BaseModel):
    user_email: str
    user_name: Optional[str] = None
    zone_id: str
    zone_name: str
    type: str


class GeofenceResponse(BaseModel):
    alerts: List[GeofenceAlertModel]
