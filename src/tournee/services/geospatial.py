"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Point, Polygon

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, in kilometres.

    NaN components propagate to a NaN result.
    """

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def bearing_degrees(a: Coordinate, b: Coordinate) -> float:
    """Calculate the initial bearing from ``a`` to ``b``."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_lambda = math.radians(b.longitude - a.longitude)
    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lambda)
    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360) % 360


def destination_point(origin: Coordinate, bearing_deg: float, distance: float) -> Coordinate:
    """Return the point reached travelling ``distance`` km from ``origin`` along ``bearing_deg``."""

    angular = distance / EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(angular) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(phi1),
        math.cos(angular) - math.sin(phi1) * math.sin(phi2),
    )
    return Coordinate(latitude=math.degrees(phi2), longitude=math.degrees(lambda2))


def point_in_polygon(point: Coordinate, polygon_coords: Sequence[tuple[float, float]]) -> bool:
    """Return True if the point is inside the polygon denoted by (lat, lon) pairs."""

    if len(polygon_coords) < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {len(polygon_coords)}.")
    polygon = Polygon([(lng, lat) for lat, lng in polygon_coords])
    return polygon.contains(Point(point.longitude, point.latitude))
