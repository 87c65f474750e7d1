"""Mapping of Data Store records onto engine value objects."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from ..models.domain import TIME_BANDS, Coordinate, RunnerLocation, Stop, TrackingSample


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(str(value).replace(",", "."))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def _coordinate(lat: Any, lon: Any) -> Optional[Coordinate]:
    latitude, longitude = _coerce_float(lat), _coerce_float(lon)
    if latitude is None or longitude is None:
        return None
    return Coordinate(latitude=latitude, longitude=longitude)


def stop_from_record(record: dict[str, Any]) -> Stop:
    """Build a Stop from a mission row.

    ``scheduled_time`` holds either a time band ("morning", ...) or an ISO
    deadline; only the former feeds the priority score.
    """

    scheduled = record.get("scheduled_time")
    time_band = record.get("time_slot") or (scheduled if scheduled in TIME_BANDS else None)
    return Stop(
        stop_id=str(record.get("id", "")),
        destination=_coordinate(record.get("delivery_lat"), record.get("delivery_lng")),
        item_count=len(record.get("shopping_list") or []),
        status=record.get("status"),
        time_band=time_band,
        estimated_value=_coerce_float(record.get("estimated_budget")) or 0.0,
        address=record.get("delivery_address"),
    )


def deadline_from_record(record: dict[str, Any]) -> Optional[datetime]:
    """Scheduled arrival of a mission, when it is an absolute timestamp."""

    if record.get("scheduled_time") in TIME_BANDS:
        return None
    return _parse_datetime(record.get("scheduled_time"))


def sample_from_location(record: dict[str, Any]) -> Optional[TrackingSample]:
    position = _coordinate(record.get("latitude"), record.get("longitude"))
    if position is None:
        return None
    timestamp = (
        _parse_datetime(record.get("updated_date"))
        or _parse_datetime(record.get("created_date"))
        or datetime.now(timezone.utc)
    )
    return TrackingSample(
        position=position,
        timestamp=timestamp,
        speed_mps=_coerce_float(record.get("speed")),
        heading=_coerce_float(record.get("heading")),
        accuracy=_coerce_float(record.get("accuracy")),
    )


def runner_location_from_record(record: dict[str, Any]) -> Optional[RunnerLocation]:
    position = _coordinate(record.get("latitude"), record.get("longitude"))
    if position is None:
        return None
    return RunnerLocation(
        user_email=record.get("user_email", ""),
        user_name=record.get("user_name"),
        position=position,
        is_available=bool(record.get("is_available", True)),
    )
