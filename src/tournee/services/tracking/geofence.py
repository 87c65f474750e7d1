"""Named delivery zones and runner membership alerts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...models.domain import Coordinate, RunnerLocation
from ..geospatial import distance_km, point_in_polygon


@dataclass(frozen=True, slots=True)
class GeofenceZone:
    """Either a circle (``center`` + ``radius_m``) or a polygon of (lat, lon) pairs."""

    zone_id: str
    name: str
    center: Optional[Coordinate] = None
    radius_m: float = 0.0
    polygon: tuple[tuple[float, float], ...] = field(default_factory=tuple)

    def contains(self, point: Coordinate) -> bool:
        if self.polygon:
            return point_in_polygon(point, self.polygon)
        if self.center is None:
            return False
        return distance_km(point, self.center) * 1000 <= self.radius_m


@dataclass(frozen=True, slots=True)
class GeofenceAlert:
    user_email: str
    user_name: Optional[str]
    zone_id: str
    zone_name: str
    type: str = "in_zone"


DEFAULT_ZONES: tuple[GeofenceZone, ...] = (
    GeofenceZone("zone1", "Centre-ville", Coordinate(48.8566, 2.3522), 2000),
    GeofenceZone("zone2", "Zone Nord", Coordinate(48.8800, 2.3522), 1500),
    GeofenceZone("zone3", "Zone Sud", Coordinate(48.8330, 2.3522), 1500),
    GeofenceZone("zone4", "Zone Est", Coordinate(48.8566, 2.3900), 1500),
)


def zones_containing(point: Coordinate, zones: Sequence[GeofenceZone] = DEFAULT_ZONES) -> list[GeofenceZone]:
    return [zone for zone in zones if zone.contains(point)]


def geofence_alerts(
    locations: Sequence[RunnerLocation],
    zones: Sequence[GeofenceZone] = DEFAULT_ZONES,
) -> list[GeofenceAlert]:
    """One alert per available runner per zone it is currently inside."""

    alerts: list[GeofenceAlert] = []
    for location in locations:
        if not location.is_available:
            continue
        for zone in zones_containing(location.position, zones):
            alerts.append(
                GeofenceAlert(
                    user_email=location.user_email,
                    user_name=location.user_name,
                    zone_id=zone.zone_id,
                    zone_name=zone.name,
                )
            )
    return alerts
