"""Tracking orchestration: lateness checks, next-mission ETA and zone alerts."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ...config import settings
from ...data.missions_repository import (
    deadline_from_record,
    runner_location_from_record,
    sample_from_location,
    stop_from_record,
)
from ...models.domain import Coordinate, LatenessVerdict, RunnerLocation, TrackingSample
from ...persistence.database import (
    create_notification,
    get_active_missions,
    get_available_locations,
    get_latest_location,
    get_mission,
    mark_mission_late,
)
from ...schemas.tracking import (
    GeofenceAlertModel,
    GeofenceRequest,
    GeofenceResponse,
    LatenessRequest,
    LatenessResponse,
    MissionLatenessResponse,
    NextMissionRequest,
    NextMissionResponse,
)
from ..clock import resolve_now
from .eta import estimate_next_stop
from .geofence import DEFAULT_ZONES, GeofenceZone, geofence_alerts
from .lateness import LatenessTransition, assess_lateness, classify_transition

LATE_STATUS = "late"


def _as_aware(value: datetime) -> datetime:
    """Naive timestamps from the database are UTC."""

    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _verdict_response(verdict: LatenessVerdict, transition: LatenessTransition) -> LatenessResponse:
    return LatenessResponse(
        is_late=verdict.is_late,
        margin_minutes=verdict.margin_minutes,
        estimated_minutes=verdict.estimated_minutes,
        minutes_until_deadline=verdict.minutes_until_deadline,
        distance_km=verdict.distance_km,
        speed_kmh=verdict.speed_kmh,
        transition=transition.value,
    )


def evaluate_lateness(payload: LatenessRequest) -> LatenessResponse:
    """Verdict for a caller-supplied sample; nothing is persisted."""

    now = resolve_now(payload.now)
    sample = TrackingSample(
        position=Coordinate(payload.sample.latitude, payload.sample.longitude),
        timestamp=payload.sample.timestamp or now,
        speed_mps=payload.sample.speed,
        heading=payload.sample.heading,
        accuracy=payload.sample.accuracy,
    )
    destination = Coordinate(payload.destination.latitude, payload.destination.longitude)
    verdict = assess_lateness(sample, destination, _as_aware(payload.scheduled_time), _as_aware(now))
    return _verdict_response(verdict, classify_transition(payload.was_late, verdict))


def check_mission_lateness(mission_id: str, now: Optional[datetime] = None) -> Optional[MissionLatenessResponse]:
    """Run one tracking tick for a mission against its runner's latest position.

    A mission flipping to late is persisted as ``late`` and its client is
    notified. A mission already stored as late is never reverted here, even
    when the runner catches up; only the returned verdict reflects it.

    Returns:
        None when the mission or the runner's position cannot be found.

    Raises:
        ValueError: if the mission has no destination or no absolute deadline.
    """
    mission = get_mission(mission_id)
    if mission is None:
        return None

    stop = stop_from_record(mission)
    deadline = deadline_from_record(mission)
    if stop.destination is None or deadline is None:
        raise ValueError(f"Mission '{mission_id}' has no delivery coordinates or scheduled time to check against.")

    runner_email = mission.get("intervenant_email")
    location = get_latest_location(runner_email) if runner_email else None
    sample = sample_from_location(location) if location else None
    if sample is None:
        logging.info(f"No position available for mission '{mission_id}' runner; skipping tick")
        return None

    current = _as_aware(resolve_now(now))
    verdict = assess_lateness(sample, stop.destination, _as_aware(deadline), current)
    previous_status = mission.get("status")
    transition = classify_transition(previous_status == LATE_STATUS, verdict)

    marked_late = False
    notified = False
    if transition is LatenessTransition.BECAME_LATE:
        logging.warning(
            f"Mission '{mission_id}' projected late by {-verdict.margin_minutes:.0f} min "
            f"(ETA {verdict.estimated_minutes} min, deadline in {verdict.minutes_until_deadline:.0f} min)"
        )
        marked_late = mark_mission_late(mission_id)
        client_email = mission.get("client_email")
        if client_email:
            late_by = verdict.estimated_minutes - verdict.minutes_until_deadline
            notified = create_notification(
                client_email,
                "Mission en retard",
                f"Votre intervenant sera en retard de {late_by:.0f} minutes environ",
                mission_id=mission_id,
            )
    elif transition is LatenessTransition.RECOVERED:
        logging.info(f"Mission '{mission_id}' back on schedule; stored late status left unchanged")

    return MissionLatenessResponse(
        mission_id=mission_id,
        previous_status=previous_status,
        verdict=_verdict_response(verdict, transition),
        marked_late=marked_late,
        notified=notified,
    )


def next_mission_eta(payload: NextMissionRequest) -> Optional[NextMissionResponse]:
    records = get_active_missions(payload.intervenant_email, limit=settings.next_mission_lookahead)
    stops = [stop_from_record(record) for record in records]
    position = Coordinate(payload.position.latitude, payload.position.longitude)

    estimate = estimate_next_stop(position, stops)
    if estimate is None:
        return None
    return NextMissionResponse(
        mission_id=estimate.stop.stop_id,
        status=estimate.stop.status,
        address=estimate.stop.address,
        distance_km=estimate.distance_km,
        eta_minutes=estimate.eta_minutes,
        proximity=estimate.proximity,
        bearing_deg=estimate.bearing_deg,
    )


def check_geofences(payload: GeofenceRequest) -> GeofenceResponse:
    if payload.locations is not None:
        locations = [
            RunnerLocation(
                user_email=item.user_email,
                user_name=item.user_name,
                position=Coordinate(item.latitude, item.longitude),
                is_available=item.is_available,
            )
            for item in payload.locations
        ]
    else:
        locations = [
            location
            for location in (runner_location_from_record(record) for record in get_available_locations())
            if location is not None
        ]

    if payload.zones is not None:
        zones = [
            GeofenceZone(
                zone_id=zone.zone_id,
                name=zone.name,
                center=Coordinate(zone.center.latitude, zone.center.longitude) if zone.center else None,
                radius_m=zone.radius_m,
                polygon=tuple(zone.polygon or ()),
            )
            for zone in payload.zones
        ]
    else:
        zones = list(DEFAULT_ZONES)

    alerts = geofence_alerts(locations, zones)
    return GeofenceResponse(
        alerts=[
            GeofenceAlertModel(
                user_email=alert.user_email,
                user_name=alert.user_name,
                zone_id=alert.zone_id,
                zone_name=alert.zone_name,
                type=alert.type,
            )
            for alert in alerts
        ]
    )
