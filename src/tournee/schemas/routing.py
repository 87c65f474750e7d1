"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

PlanningMode = Literal["nearest", "clustered"]


class CoordinateModel(BaseModel):
    latitude: float
    longitude: float


class StopModel(BaseModel):
    id: str
    latitude: Optional[float] = Field(default=None, description="Delivery latitude; stops without one are skipped.")
    longitude: Optional[float] = None
    item_count: int = Field(default=0, ge=0)
    status: Optional[str] = None
    time_band: Optional[str] = Field(default=None, description="morning, afternoon or evening.")
    estimated_value: float = 0.0
    address: Optional[str] = None


class RoutingRequest(BaseModel):
    origin: CoordinateModel
    stops: List[StopModel] = Field(default_factory=list)
    mode: PlanningMode = "clustered"
    cluster_size: Optional[int] = Field(default=None, ge=1)
    speed_kmh: Optional[float] = Field(
        default=None,
        gt=0,
        description="Speed of the nearest-first simple ETA. Ignored in clustered mode.",
    )
    now: Optional[datetime] = Field(
        default=None,
        description="Wall clock used for traffic bands and completion time. Defaults to the configured timezone's current time.",
    )


class IntervenantRoutingRequest(BaseModel):
    origin: CoordinateModel
    mode: PlanningMode = "clustered"
    cluster_size: Optional[int] = Field(default=None, ge=1)
    now: Optional[datetime] = None


class RouteStopModel(BaseModel):
    stop_id: str
    sequence: int
    cluster: Optional[int] = None
    address: Optional[str] = None
    latitude: float
    longitude: float
    distance_from_prev_km: float
    travel_min: float
    execution_min: float
    cumulative_distance_km: float
    cumulative_min: float


class RouteStatsModel(BaseModel):
    stop_count: int
    total_distance_km: float
    total_distance_label: str
    total_duration_min: float
    average_min_per_stop: float
    estimated_completion: Optional[datetime] = None
    traffic_multiplier: Optional[float] = None


class RoutingResponse(BaseModel):
    mode: PlanningMode
    stops: List[RouteStopModel]
    stats: RouteStatsModel
    warnings: List[str] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)
