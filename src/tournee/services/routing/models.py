"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ...models.domain import Stop


@dataclass(slots=True)
class RouteStop:
    stop: Stop
    sequence: int
    distance_from_prev_km: float
    travel_min: float
    execution_min: float
    cumulative_distance_km: float
    cumulative_min: float
    cluster: Optional[int] = None

    @property
    def total_min(self) -> float:
        return self.travel_min + self.execution_min


@dataclass(slots=True)
class RouteStats:
    stop_count: int
    total_distance_km: float
    total_duration_min: float
    average_min_per_stop: float
    estimated_completion: Optional[datetime] = None
    traffic_multiplier: Optional[float] = None

    @property
    def total_distance_label(self) -> str:
        return f"{self.total_distance_km:.2f}"


@dataclass(slots=True)
class RoutePlan:
    mode: str
    stops: List[RouteStop]
    stats: RouteStats
    warnings: List[str] = field(default_factory=list)
