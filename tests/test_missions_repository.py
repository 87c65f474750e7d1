from datetime import datetime, timezone

import pytest

from tournee.models.domain import RunnerLocation
from tournee.data.missions_repository import (
    deadline_from_record,
    runner_location_from_record,
    sample_from_location,
    stop_from_record,
)


def test_stop_from_record_maps_mission_fields():
    record = {
        "id": 42,
        "delivery_lat": "48,8600",
        "delivery_lng": 2.34,
        "shopping_list": [{"name": "bread"}, {"name": "milk"}, {"name": "eggs"}],
        "status": "shopping",
        "scheduled_time": "afternoon",
        "estimated_budget": "35.5",
        "delivery_address": "1 rue de Rivoli",
    }

    stop = stop_from_record(record)

    assert stop.stop_id == "42"
    assert stop.destination.latitude == pytest.approx(48.86)
    assert stop.destination.longitude == pytest.approx(2.34)
    assert stop.item_count == 3
    assert stop.time_band == "afternoon"
    assert stop.estimated_value == pytest.approx(35.5)
    assert stop.address == "1 rue de Rivoli"


def test_stop_without_coordinates_has_no_destination():
    stop = stop_from_record({"id": "M1", "delivery_lat": None, "delivery_lng": "", "shopping_list": None})

    assert stop.destination is None
    assert stop.item_count == 0
    assert stop.estimated_value == 0.0


def test_unparseable_coordinate_raises():
    with pytest.raises(ValueError):
        stop_from_record({"id": "M1", "delivery_lat": "north", "delivery_lng": 2.3})


def test_deadline_from_record():
    assert deadline_from_record({"scheduled_time": "morning"}) is None
    assert deadline_from_record({"scheduled_time": None}) is None
    assert deadline_from_record({"scheduled_time": "not a date"}) is None
    assert deadline_from_record({"scheduled_time": "2026-03-02T14:30:00+00:00"}) == datetime(
        2026, 3, 2, 14, 30, tzinfo=timezone.utc
    )


def test_sample_from_location():
    sample = sample_from_location(
        {
            "latitude": 48.85,
            "longitude": 2.35,
            "speed": "4.2",
            "heading": 90,
            "accuracy": None,
            "updated_date": "2026-03-02T14:00:00+00:00",
        }
    )

    assert sample.speed_mps == pytest.approx(4.2)
    assert sample.heading == 90
    assert sample.accuracy is None
    assert sample.timestamp == datetime(2026, 3, 2, 14, 0, tzinfo=timezone.utc)


def test_sample_without_position():
    assert sample_from_location({"latitude": None, "longitude": 2.35}) is None


def test_runner_location_from_record():
    location = runner_location_from_record(
        {"user_email": "a@example.com", "user_name": "Alice", "latitude": 48.85, "longitude": 2.35, "is_available": False}
    )

    assert location.user_email == "a@example.com"
    assert location.is_available is False
    assert isinstance(location, RunnerLocation)
    assert runner_location_from_record({"user_email": "b@example.com"}) is None
