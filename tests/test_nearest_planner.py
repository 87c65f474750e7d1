import pytest

from tournee.models.domain import Coordinate, Stop
from tournee.services.geospatial import destination_point, distance_km
from tournee.services.routing.nearest import plan_nearest_first
from tournee.services.timing.traffic import simple_eta_minutes

PARIS = Coordinate(48.8566, 2.3522)


def _stop(sid: str, lat: float | None, lon: float | None, items: int = 0) -> Stop:
    destination = Coordinate(lat, lon) if lat is not None and lon is not None else None
    return Stop(stop_id=sid, destination=destination, item_count=items)


def test_two_stop_route():
    stop_a = _stop("A", 48.8600, 2.3400, items=5)
    stop_b = _stop("B", 48.8700, 2.3700, items=10)

    plan = plan_nearest_first(PARIS, [stop_b, stop_a])

    assert [item.stop.stop_id for item in plan.stops] == ["A", "B"]
    first, second = plan.stops
    assert first.distance_from_prev_km == pytest.approx(distance_km(PARIS, stop_a.destination))
    assert second.distance_from_prev_km == pytest.approx(distance_km(stop_a.destination, stop_b.destination))
    assert first.distance_from_prev_km > 0 and second.distance_from_prev_km > 0
    assert first.travel_min == simple_eta_minutes(first.distance_from_prev_km, 18)
    assert second.travel_min == simple_eta_minutes(second.distance_from_prev_km, 18)
    assert first.execution_min == 25
    assert second.execution_min == 40
    assert plan.warnings == []


def test_totals_match_per_stop_times():
    stops = [_stop(f"S{i}", 48.85 + i * 0.01, 2.35 - i * 0.005, items=i) for i in range(5)]

    plan = plan_nearest_first(PARIS, stops)

    assert plan.stats.total_duration_min == sum(item.travel_min + item.execution_min for item in plan.stops)
    assert plan.stats.total_distance_km == pytest.approx(sum(item.distance_from_prev_km for item in plan.stops))
    assert plan.stops[-1].cumulative_min == plan.stats.total_duration_min
    assert [item.sequence for item in plan.stops] == [1, 2, 3, 4, 5]


def test_order_is_fixed_by_distance_from_origin():
    # C is closest to A but farther from the origin than B, so it still comes last.
    stop_a = _stop("A", *_offset(1.0, 0))
    stop_b = _stop("B", *_offset(1.5, 180))
    stop_c = _stop("C", *_offset(2.0, 0))

    plan = plan_nearest_first(PARIS, [stop_c, stop_b, stop_a])

    assert [item.stop.stop_id for item in plan.stops] == ["A", "B", "C"]


def test_stops_without_coordinates_are_skipped():
    stops = [
        _stop("A", 48.86, 2.34),
        _stop("B", None, None),
        _stop("C", 48.87, 2.37),
        _stop("D", 48.87, None),
    ]

    plan = plan_nearest_first(PARIS, stops)

    ids = [item.stop.stop_id for item in plan.stops]
    assert sorted(ids) == ["A", "C"]
    assert len(ids) == len(set(ids))


def test_long_leg_warning():
    far = _stop("FAR", *_offset(20.0, 90))

    plan = plan_nearest_first(PARIS, [_stop("NEAR", *_offset(1.0, 90)), far])

    assert plan.warnings == ["Stop 2: long leg (19.0 km)"]
    assert [item.stop.stop_id for item in plan.stops] == ["NEAR", "FAR"]


def test_empty_route():
    plan = plan_nearest_first(PARIS, [_stop("X", None, None)])

    assert plan.stops == []
    assert plan.stats.total_distance_km == 0
    assert plan.stats.total_distance_label == "0.00"
    assert plan.stats.total_duration_min == 0
    assert plan.stats.average_min_per_stop == 0


def _offset(km: float, bearing: float) -> tuple[float, float]:
    point = destination_point(PARIS, bearing, km)
    return point.latitude, point.longitude


def test_repeated_planning_is_identical():
    # east and west stops are the same distance from the origin
    origin = Coordinate(0.0, 0.0)
    stops = [
        _stop("E", 0.0, 0.02, items=2),
        _stop("W", 0.0, -0.02, items=1),
        _stop("N", 0.05, 0.0, items=4),
    ]

    first = plan_nearest_first(origin, stops)
    second = plan_nearest_first(origin, stops)

    assert [item.stop.stop_id for item in first.stops] == [item.stop.stop_id for item in second.stops]
    assert [item.stop.stop_id for item in first.stops][:2] == ["E", "W"]
    assert first.stats == second.stats
    assert first.warnings == second.warnings
