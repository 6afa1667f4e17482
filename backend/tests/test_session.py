import pytest

from flightpath.core.errors import EmptyLog, IndexOutOfRange, InsufficientPoints, InvalidInput, PathNotReady
from flightpath.schemas.flight import SimState


@pytest.mark.unit
class TestWaypointActions:
    def test_invalid_point_not_added(self, session):
        with pytest.raises(InvalidInput):
            session.add_point("north", 1)
        assert len(session.waypoints) == 0

    def test_add_invalidates_trajectory(self, two_point_session):
        two_point_session.calculate_trajectory()
        two_point_session.add_point(1, 1, 0)
        assert two_point_session.trajectory is None
        with pytest.raises(PathNotReady):
            two_point_session.launch()

    def test_remove_invalidates_trajectory(self, two_point_session):
        two_point_session.add_point(1, 1, 0)
        two_point_session.calculate_trajectory()
        two_point_session.remove_point(2)
        assert two_point_session.trajectory is None

    def test_bad_remove_keeps_state(self, two_point_session):
        two_point_session.calculate_trajectory()
        traj = two_point_session.trajectory
        with pytest.raises(IndexOutOfRange):
            two_point_session.remove_point(7)
        assert two_point_session.trajectory is traj
        assert len(two_point_session.waypoints) == 2

    def test_add_during_run_resets_simulation(self, two_point_session):
        two_point_session.calculate_trajectory(1000)
        two_point_session.launch()
        two_point_session.engine.advance(5.0)
        assert len(two_point_session.telemetry) == 1
        two_point_session.add_point(1, 1, 0)
        assert two_point_session.status().state == SimState.IDLE
        assert len(two_point_session.telemetry) == 0

    def test_remove_during_run_resets_simulation(self, two_point_session):
        two_point_session.add_point(1, 1, 0)
        two_point_session.calculate_trajectory(1000)
        two_point_session.launch()
        two_point_session.engine.advance(5.0)
        two_point_session.remove_point(2)
        assert two_point_session.status().state == SimState.IDLE
        assert len(two_point_session.telemetry) == 0

    def test_rejected_edit_keeps_run(self, two_point_session):
        two_point_session.calculate_trajectory(1000)
        two_point_session.launch()
        two_point_session.engine.advance(5.0)
        with pytest.raises(InvalidInput):
            two_point_session.add_point("north", 1)
        with pytest.raises(IndexOutOfRange):
            two_point_session.remove_point(9)
        assert two_point_session.status().state == SimState.RUNNING
        assert len(two_point_session.telemetry) == 1

    def test_map_click_only_in_mode(self, session):
        assert session.add_from_map(1.0, 2.0) is None
        session.set_map_alt("350")
        assert session.toggle_map_click() is True
        assert session.add_from_map(1.0, 2.0) == 0
        assert session.waypoints.points[0].alt == 350.0
        assert session.toggle_map_click() is False

    def test_annotations_use_session_speed(self, two_point_session):
        two_point_session.set_speed(1000)
        items = two_point_session.annotated_waypoints()
        assert items[1].leg_time_s == pytest.approx(111.195, rel=1e-3)

    def test_clear_is_full_reset(self, two_point_session):
        two_point_session.calculate_trajectory(100)
        two_point_session.run_offline(dt=10.0)
        two_point_session.clear()
        assert len(two_point_session.waypoints) == 0
        assert two_point_session.trajectory is None
        assert two_point_session.status().state == SimState.IDLE
        assert len(two_point_session.telemetry) == 0


@pytest.mark.unit
class TestTrajectoryActions:
    def test_needs_two_points(self, session):
        session.add_point(0, 0)
        with pytest.raises(InsufficientPoints):
            session.calculate_trajectory(50)
        assert session.trajectory is None
        assert session.speed == 1.0

    def test_two_point_scenario(self, two_point_session):
        summary = two_point_session.calculate_trajectory(1000)
        assert summary.samples == 2
        assert summary.total_distance_m == pytest.approx(111195, rel=0.01)
        assert summary.travel_time_s == pytest.approx(111.195, rel=0.01)

    @pytest.mark.parametrize("raw", [None, "", "fast", 0])
    def test_default_speed(self, two_point_session, raw):
        summary = two_point_session.calculate_trajectory(raw)
        assert summary.speed_mps == 1.0
        assert summary.travel_time_s == pytest.approx(summary.total_distance_m)

    def test_summary_requires_trajectory(self, session):
        with pytest.raises(PathNotReady):
            session.trajectory_summary()


@pytest.mark.unit
class TestSimulationActions:
    def test_launch_without_path(self, two_point_session):
        with pytest.raises(PathNotReady):
            two_point_session.launch()
        assert two_point_session.status().state == SimState.IDLE

    def test_offline_run_and_export(self, two_point_session):
        two_point_session.calculate_trajectory(1000)
        status = two_point_session.run_offline(dt=1.0)
        assert status.state == SimState.COMPLETED
        assert status.eta_s == 0.0
        csv_text = two_point_session.export_csv(30, "seconds")
        rows = csv_text.strip().split("\n")
        assert rows[0] == "time,lat,lng,alt,speed,eta,dist"
        assert rows[1].startswith("0.00,0.000000,0.000000,0.0,1000,")
        assert rows[-1].startswith("112.00,0.000000,1.000000,0.0,1000,0.0,")
        assert [r.split(",")[0] for r in rows[1:]] == ["0.00", "30.00", "60.00", "90.00", "112.00"]

    def test_relaunch_clears_log(self, two_point_session):
        two_point_session.calculate_trajectory(1000)
        two_point_session.run_offline(dt=1.0)
        two_point_session.launch()
        assert len(two_point_session.telemetry) == 0

    def test_export_without_run(self, two_point_session):
        with pytest.raises(EmptyLog):
            two_point_session.export_csv(1, "seconds")

    def test_export_file(self, two_point_session, sim_dir):
        two_point_session.calculate_trajectory(1000)
        two_point_session.run_offline(dt=1.0)
        path = two_point_session.export_file("10", "distance")
        assert path == sim_dir / "missile_log.csv"
        assert path.read_text().startswith("time,lat,lng,alt,speed,eta,dist\n")

    def test_reset(self, two_point_session):
        two_point_session.calculate_trajectory(1000)
        two_point_session.run_offline(dt=1.0)
        two_point_session.reset()
        assert two_point_session.status().state == SimState.IDLE
        assert two_point_session.trajectory is not None
