import pytest

from flightpath.core.errors import IndexOutOfRange, InvalidInput
from flightpath.schemas.flight import Waypoint
from flightpath.services.waypoints import (
    WaypointStore,
    parse_speed,
    parse_waypoint,
    parse_waypoint_string,
)


def _store(*coords):
    store = WaypointStore()
    for lat, lng, alt in coords:
        store.add(Waypoint(lat=lat, lng=lng, alt=alt))
    return store


@pytest.mark.unit
class TestParseWaypoint:
    def test_numeric_strings(self):
        wp = parse_waypoint("12.5", " -3.25 ", "100")
        assert (wp.lat, wp.lng, wp.alt) == (12.5, -3.25, 100.0)

    @pytest.mark.parametrize("lat,lng", [(None, 1), ("", 1), ("abc", 1), (1, "nan"), (1, None), (True, 1)])
    def test_missing_or_non_numeric_coordinate(self, lat, lng):
        with pytest.raises(InvalidInput):
            parse_waypoint(lat, lng, 0)

    @pytest.mark.parametrize("alt", [None, "", "high"])
    def test_altitude_defaults_to_zero(self, alt):
        assert parse_waypoint(1, 2, alt).alt == 0.0


@pytest.mark.unit
class TestParseWaypointString:
    def test_points_in_order(self):
        pts = parse_waypoint_string("0,0,0|0,1,500| 1,1 ")
        assert [p.as_tuple() for p in pts] == [(0, 0, 0), (0, 1, 500), (1, 1, 0)]

    def test_trailing_turn_angle_field_is_ignored(self):
        pts = parse_waypoint_string("0,0,0,45|1,1,10,90")
        assert [p.as_tuple() for p in pts] == [(0, 0, 0), (1, 1, 10)]

    @pytest.mark.parametrize("text", ["0", "0,0,0|x,1,0", "0,0,abc", "1,2,3,4,5"])
    def test_malformed(self, text):
        with pytest.raises(InvalidInput):
            parse_waypoint_string(text)


@pytest.mark.unit
class TestParseSpeed:
    @pytest.mark.parametrize("raw", [None, "", "fast", 0, "0", -5])
    def test_defaults(self, raw):
        assert parse_speed(raw, 1.0) == 1.0

    def test_numeric(self):
        assert parse_speed("250.5", 1.0) == 250.5


@pytest.mark.unit
class TestWaypointStore:
    def test_add_returns_index(self):
        store = WaypointStore()
        assert store.add(Waypoint(lat=0, lng=0)) == 0
        assert store.add(Waypoint(lat=1, lng=1)) == 1
        assert len(store) == 2

    def test_identical_points_allowed(self):
        store = _store((0, 0, 0), (0, 0, 0))
        assert len(store) == 2

    def test_remove_at(self):
        store = _store((0, 0, 0), (1, 1, 1), (2, 2, 2))
        removed = store.remove_at(1)
        assert removed.as_tuple() == (1, 1, 1)
        assert store.as_tuples() == [(0, 0, 0), (2, 2, 2)]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_remove_invalid_index_leaves_store_untouched(self, index):
        store = _store((0, 0, 0), (1, 1, 1), (2, 2, 2))
        with pytest.raises(IndexOutOfRange):
            store.remove_at(index)
        assert len(store) == 3

    def test_remove_rejects_bool_index(self):
        store = _store((0, 0, 0), (1, 1, 1))
        with pytest.raises(IndexOutOfRange):
            store.remove_at(True)
        assert len(store) == 2

    def test_clear(self):
        store = _store((0, 0, 0), (1, 1, 1))
        store.clear()
        assert len(store) == 0

    def test_points_is_a_copy(self):
        store = _store((0, 0, 0))
        store.points.append(Waypoint(lat=9, lng=9))
        assert len(store) == 1


@pytest.mark.unit
class TestAnnotatedList:
    def test_collinear_turns_are_zero(self):
        store = _store((0, 0, 0), (0, 1, 0), (0, 2, 0), (0, 3, 0))
        items = store.annotated_list()
        assert items[0].turn_angle_deg is None
        assert items[1].turn_angle_deg is None
        assert items[2].turn_angle_deg == pytest.approx(0.0)
        assert items[3].turn_angle_deg == pytest.approx(0.0)

    def test_reversal(self):
        store = _store((0, 0, 0), (1, 0, 0), (0, 0, 0))
        assert store.annotated_list()[2].turn_angle_deg == pytest.approx(180.0)

    def test_degenerate_turn_is_none(self):
        store = _store((0, 0, 0), (0, 0, 0), (1, 0, 0))
        assert store.annotated_list()[2].turn_angle_deg is None

    def test_leg_annotations(self):
        store = _store((0, 0, 0), (0, 1, 0))
        first, second = store.annotated_list(speed_mps=1000.0)
        assert first.distance_from_previous_km is None
        assert second.distance_from_previous_km == pytest.approx(111.19493, rel=1e-6)
        assert second.bearing_from_previous_deg == pytest.approx(90.0)
        assert second.leg_time_s == pytest.approx(111.19493, rel=1e-6)

    def test_zero_length_leg_bearing_is_zero(self):
        store = _store((0, 0, 0), (0, 0, 0))
        assert store.annotated_list()[1].bearing_from_previous_deg == 0.0
