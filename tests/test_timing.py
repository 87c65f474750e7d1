import math
from datetime import datetime

import pytest

from tournee.services.timing import (
    EXECUTION_STRATEGIES,
    mission_execution_minutes,
    shopping_minutes,
    simple_eta_minutes,
    traffic_band,
    traffic_multiplier,
    traffic_travel_minutes,
)
from tournee.services.timing.traffic import round_half_up


def _at(hour: int) -> datetime:
    return datetime(2026, 3, 2, hour, 30)


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(9, 1.5), (11, 1.2), (2, 0.9), (18, 1.5), (10, 1.5), (12, 1.5), (13, 1.5), (21, 1.2), (22, 0.9), (7, 0.9)],
)
def test_traffic_multiplier_by_hour(hour, expected):
    assert traffic_multiplier(_at(hour)) == expected


def test_every_hour_maps_to_one_band():
    bands = {hour: traffic_band(_at(hour)) for hour in range(24)}

    assert {hour for hour, band in bands.items() if band == "peak"} == {8, 9, 10, 12, 13, 17, 18, 19}
    assert {hour for hour, band in bands.items() if band == "moderate"} == {11, 14, 15, 16, 20, 21}
    assert {hour for hour, band in bands.items() if band == "off_peak"} == {0, 1, 2, 3, 4, 5, 6, 7, 22, 23}


def test_traffic_travel_minutes_applies_multiplier():
    # 18 km/h base: 12 km/h at peak, 15 km/h moderate, 20 km/h off-peak
    assert traffic_travel_minutes(9, _at(9)) == 45
    assert traffic_travel_minutes(9, _at(15)) == 36
    assert traffic_travel_minutes(9, _at(3)) == 27


def test_simple_eta_ignores_time_of_day():
    assert simple_eta_minutes(10, 15) == 40
    assert simple_eta_minutes(9) == 30
    assert simple_eta_minutes(0) == 0


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1
    assert math.isnan(round_half_up(float("nan")))


def test_shopping_minutes():
    assert shopping_minutes(0) == 10
    assert shopping_minutes(5) == 25
    assert shopping_minutes(10) == 40


def test_mission_execution_minutes_is_clamped():
    assert mission_execution_minutes(0) == 10
    assert mission_execution_minutes(8) == 16
    assert mission_execution_minutes(40) == 30


def test_strategies_are_registered_separately():
    assert EXECUTION_STRATEGIES["shopping"](10) == 40
    assert EXECUTION_STRATEGIES["mission"](10) == 20
