from __future__ import annotations
from pathlib import Path
from typing import Any, List, Optional

from flightpath.core.config import DEFAULT_SPEED_MPS, EXPORT_INTERVAL, EXPORT_INTERVAL_TYPE, SPLINE_STEPS
from flightpath.core.errors import PathNotReady
from flightpath.core.logger import get_logger
from flightpath.schemas.flight import AnnotatedWaypoint, SimulationStatus, TrajectorySummary, Waypoint
from flightpath.services.interpolator import Trajectory, build_trajectory
from flightpath.services.player import FlightPlayer, run_offline
from flightpath.services.simulation import SimulationEngine
from flightpath.services.telemetry import TelemetryLog, check_interval_type, parse_interval
from flightpath.services.waypoints import WaypointStore, to_float, parse_speed, parse_waypoint
from flightpath.services.writer import write_log_csv

log = get_logger(__name__)


class FlightSession:
    """Owns the waypoints, the current trajectory, the engine and its log.

    Any waypoint change drops the computed trajectory and resets the
    simulation, so a launch always flies a path built from the current
    waypoints. ``clear`` also empties the waypoints.
    """

    def __init__(self, default_speed: float = DEFAULT_SPEED_MPS, spline_steps: int = SPLINE_STEPS):
        self.default_speed = default_speed
        self.spline_steps = spline_steps
        self.waypoints = WaypointStore()
        self.engine = SimulationEngine()
        self.player = FlightPlayer(self.engine)
        self.trajectory: Optional[Trajectory] = None
        self.speed = default_speed
        self.map_click_mode = False
        self.map_alt = 0.0

    @property
    def telemetry(self) -> TelemetryLog:
        return self.engine.log

    def set_speed(self, raw: Any) -> float:
        self.speed = parse_speed(raw, self.default_speed)
        return self.speed

    # --- waypoints -------------------------------------------------------
    def _invalidate(self) -> None:
        """Waypoints changed: the path is stale and any run on it is over."""
        self.trajectory = None
        self.player.cancel()
        self.engine.reset()

    def add_point(self, lat: Any, lng: Any, alt: Any = None) -> int:
        wp = parse_waypoint(lat, lng, alt)
        idx = self.waypoints.add(wp)
        self._invalidate()
        return idx

    def toggle_map_click(self) -> bool:
        self.map_click_mode = not self.map_click_mode
        return self.map_click_mode

    def set_map_alt(self, raw: Any) -> float:
        self.map_alt = to_float(raw) or 0.0
        return self.map_alt

    def add_from_map(self, lat: float, lng: float) -> Optional[int]:
        """Map click report; ignored unless map-click mode is on."""
        if not self.map_click_mode:
            return None
        return self.add_point(lat, lng, self.map_alt)

    def remove_point(self, index: int) -> Waypoint:
        removed = self.waypoints.remove_at(index)
        self._invalidate()
        return removed

    def annotated_waypoints(self) -> List[AnnotatedWaypoint]:
        return self.waypoints.annotated_list(self.speed)

    def clear(self) -> None:
        self.waypoints.clear()
        self._invalidate()
        log.info("session cleared")

    # --- trajectory ------------------------------------------------------
    def calculate_trajectory(self, speed: Any = None) -> TrajectorySummary:
        traj = build_trajectory(self.waypoints.as_tuples(), self.spline_steps)
        self.trajectory = traj
        if speed is not None:
            self.set_speed(speed)
        return traj.summary(self.speed)

    def trajectory_summary(self) -> TrajectorySummary:
        if self.trajectory is None:
            raise PathNotReady("Calculate trajectory first.")
        return self.trajectory.summary(self.speed)

    # --- simulation ------------------------------------------------------
    def launch(self, speed: Any = None) -> int:
        if self.trajectory is None:
            raise PathNotReady("Calculate trajectory first.")
        use_speed = parse_speed(speed, self.default_speed) if speed is not None else self.speed
        run_id = self.engine.launch(self.trajectory, use_speed)
        self.speed = use_speed
        self.player.cancel()
        return run_id

    def launch_live(self, speed: Any = None) -> int:
        """Launch and schedule frame ticks on the running event loop."""
        run_id = self.launch(speed)
        self.player.start(run_id)
        return run_id

    def run_offline(self, dt: float, speed: Any = None) -> SimulationStatus:
        self.launch(speed)
        run_offline(self.engine, dt)
        return self.engine.status()

    def reset(self) -> None:
        self.player.cancel()
        self.engine.reset()

    def status(self) -> SimulationStatus:
        return self.engine.status()

    # --- export ----------------------------------------------------------
    def export_csv(self, interval: Any = EXPORT_INTERVAL, interval_type: str = EXPORT_INTERVAL_TYPE) -> str:
        return self.telemetry.to_csv(parse_interval(interval), check_interval_type(interval_type))

    def export_file(self, interval: Any = EXPORT_INTERVAL, interval_type: str = EXPORT_INTERVAL_TYPE,
                    out_path: Optional[Path] = None) -> Path:
        return write_log_csv(self.telemetry, parse_interval(interval), check_interval_type(interval_type), out_path)
