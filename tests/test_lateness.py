import math
from datetime import datetime, timedelta, timezone

import pytest

from tournee.models.domain import Coordinate, TrackingSample
from tournee.services.geospatial import destination_point
from tournee.services.tracking.lateness import (
    LatenessTransition,
    assess_lateness,
    classify_transition,
    effective_speed_kmh,
)

PARIS = Coordinate(48.8566, 2.3522)
NOW = datetime(2026, 3, 2, 14, 0, tzinfo=timezone.utc)
TEN_KM_EAST = destination_point(PARIS, 90, 10)


def _sample(speed_mps=None, position=PARIS) -> TrackingSample:
    return TrackingSample(position=position, timestamp=NOW, speed_mps=speed_mps)


@pytest.mark.parametrize(
    "minutes_ahead, expected_late, expected_margin",
    [
        (26, False, 1),
        (25, False, 0),
        (24, True, -1),
    ],
)
def test_grace_boundary(minutes_ahead, expected_late, expected_margin):
    # 10 km at the 15 km/h fallback is 40 minutes; grace is 15 minutes
    verdict = assess_lateness(_sample(), TEN_KM_EAST, NOW + timedelta(minutes=minutes_ahead), NOW)

    assert verdict.estimated_minutes == 40
    assert verdict.is_late is expected_late
    assert verdict.margin_minutes == pytest.approx(expected_margin)


def test_deadline_already_passed():
    verdict = assess_lateness(_sample(), TEN_KM_EAST, NOW - timedelta(minutes=5), NOW)

    assert verdict.minutes_until_deadline == pytest.approx(-5)
    assert verdict.is_late is True
    assert verdict.margin_minutes == pytest.approx(-30)


def test_reported_speed_is_metres_per_second():
    assert effective_speed_kmh(_sample(speed_mps=5)) == pytest.approx(18)

    verdict = assess_lateness(_sample(speed_mps=5), TEN_KM_EAST, NOW + timedelta(minutes=30), NOW)
    assert verdict.speed_kmh == pytest.approx(18)
    assert verdict.estimated_minutes == 33


@pytest.mark.parametrize("speed", [None, 0, -2.5])
def test_missing_or_non_positive_speed_uses_default(speed):
    assert effective_speed_kmh(_sample(speed_mps=speed)) == 15
    assert effective_speed_kmh(_sample(speed_mps=speed), default_speed_kmh=12) == 12


def test_custom_grace():
    verdict = assess_lateness(
        _sample(), TEN_KM_EAST, NOW + timedelta(minutes=35), NOW, grace_minutes=0
    )

    assert verdict.is_late is True
    assert verdict.margin_minutes == pytest.approx(-5)


def test_runner_at_destination_is_on_time():
    verdict = assess_lateness(_sample(), PARIS, NOW, NOW)

    assert verdict.distance_km == 0
    assert verdict.estimated_minutes == 0
    assert verdict.is_late is False


def test_nan_position_is_not_flagged():
    sample = _sample(position=Coordinate(float("nan"), 2.35))

    verdict = assess_lateness(sample, PARIS, NOW + timedelta(minutes=10), NOW)

    assert math.isnan(verdict.estimated_minutes)
    assert verdict.is_late is False


@pytest.mark.parametrize(
    "was_late, minutes_ahead, expected",
    [
        (False, 10, LatenessTransition.BECAME_LATE),
        (True, 10, LatenessTransition.UNCHANGED),
        (True, 60, LatenessTransition.RECOVERED),
        (False, 60, LatenessTransition.UNCHANGED),
    ],
)
def test_transitions(was_late, minutes_ahead, expected):
    verdict = assess_lateness(_sample(), TEN_KM_EAST, NOW + timedelta(minutes=minutes_ahead), NOW)

    assert classify_transition(was_late, verdict) is expected
