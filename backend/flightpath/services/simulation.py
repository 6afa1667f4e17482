from __future__ import annotations
from typing import List, Optional, Sequence, Union

from flightpath.core.errors import InvalidInput, PathNotReady, PathTooShort
from flightpath.core.logger import get_logger
from flightpath.schemas.flight import LatLngAlt, LogEntry, SimState, SimulationStatus
from flightpath.services.interpolator import Trajectory
from flightpath.services.readout import format_duration, format_position, format_speed
from flightpath.services.telemetry import TelemetryLog
from flightpath.utils.geo import cumulative_distance_km, lerp_lla

log = get_logger(__name__)


class SimulationEngine:
    """Moves one simulated object along a trajectory as a function of elapsed time.

    States go IDLE -> RUNNING -> COMPLETED; ``launch`` and ``reset`` always
    start over. Each launch/reset bumps ``run_id`` so ticks scheduled for an
    earlier run are ignored by ``tick``.

    Position is derived from distance traveled (elapsed * speed), never from
    the number of ticks, so the result does not depend on the tick rate.
    """

    def __init__(self, telemetry: Optional[TelemetryLog] = None):
        self.log = telemetry if telemetry is not None else TelemetryLog()
        self.state = SimState.IDLE
        self.run_id = 0
        self._clear_run()

    def _clear_run(self):
        self._samples: List[LatLngAlt] = []
        self._cum_m: List[float] = []
        self._seg = 1
        self._start: Optional[float] = None
        self.speed: Optional[float] = None
        self.total_distance_m = 0.0
        self.total_time_s = 0.0
        self.elapsed_s = 0.0
        self.progress_m = 0.0
        self.position: Optional[LatLngAlt] = None

    def launch(self, path: Union[Trajectory, Sequence[LatLngAlt]], speed: float) -> int:
        """Start a fresh run, replacing any run in flight. Returns the new run id.
        The time origin is the first tick, not this call."""
        if isinstance(path, Trajectory):
            samples, cum_km = list(path.samples), path.cumulative_km
        else:
            samples = [tuple(p) for p in (path or [])]
            cum_km = cumulative_distance_km(samples)
        if len(samples) < 2:
            raise PathTooShort("Calculate trajectory first.")
        if speed is None or speed <= 0:
            raise InvalidInput(f"speed must be positive, got {speed!r}")

        self.run_id += 1
        self._clear_run()
        self.log.clear()
        self._samples = samples
        self._cum_m = [d * 1000.0 for d in cum_km]
        self.speed = float(speed)
        self.total_distance_m = self._cum_m[-1]
        self.total_time_s = self.total_distance_m / self.speed
        self.state = SimState.RUNNING
        log.info("launch run=%d: %.0f m at %s m/s, %.1f s expected",
                 self.run_id, self.total_distance_m, self.speed, self.total_time_s)
        return self.run_id

    def is_current(self, run_id: int) -> bool:
        return run_id == self.run_id and self.state is SimState.RUNNING

    def tick(self, now: float, run_id: Optional[int] = None) -> Optional[LogEntry]:
        """Advance using a clock reading in seconds.

        The first tick of a run fixes the time origin. Ticks belonging to an
        older run, or arriving when nothing is running, are dropped.
        """
        if run_id is not None and run_id != self.run_id:
            log.debug("stale tick for run %d dropped (current %d)", run_id, self.run_id)
            return None
        if self.state is not SimState.RUNNING:
            return None
        if self._start is None:
            self._start = now
        return self.advance(now - self._start)

    def advance(self, elapsed_s: float) -> LogEntry:
        if self.state is not SimState.RUNNING:
            raise PathNotReady("Simulation is not running.")
        # an earlier clock reading never rewinds the run
        elapsed = max(float(elapsed_s), self.elapsed_s, 0.0)
        progress = min(elapsed * self.speed, self.total_distance_m)

        cum = self._cum_m
        last = len(self._samples) - 1
        seg = self._seg
        while seg < last and cum[seg] < progress:
            seg += 1
        self._seg = seg

        seg_len = cum[seg] - cum[seg - 1]
        frac = 0.0 if seg_len == 0 else (progress - cum[seg - 1]) / seg_len
        pos = lerp_lla(self._samples[seg - 1], self._samples[seg], frac)

        self.elapsed_s = elapsed
        self.progress_m = progress
        self.position = pos
        entry = LogEntry(
            time=elapsed,
            lat=pos[0],
            lng=pos[1],
            alt=pos[2],
            speed=self.speed,
            eta=self.eta_s,
            dist=progress,
        )
        self.log.append(entry)

        if progress >= self.total_distance_m:
            self.state = SimState.COMPLETED
            log.info("run=%d completed after %.2f s, %d ticks", self.run_id, elapsed, len(self.log))
        return entry

    @property
    def eta_s(self) -> Optional[float]:
        if self.state is SimState.IDLE:
            return None
        return max(0.0, self.total_time_s - self.elapsed_s)

    def reset(self) -> None:
        """Back to IDLE: drops the log and the live position, invalidates pending ticks."""
        self.run_id += 1
        self.state = SimState.IDLE
        self.log.clear()
        self._clear_run()
        log.info("simulation reset (run id now %d)", self.run_id)

    def status(self) -> SimulationStatus:
        st = SimulationStatus(
            state=self.state,
            run_id=self.run_id,
            elapsed_s=self.elapsed_s,
            progress_m=self.progress_m,
            total_distance_m=self.total_distance_m,
            position=self.position,
            speed_mps=self.speed,
            eta_s=self.eta_s,
            log_entries=len(self.log),
        )
        if self.position is not None:
            st.position_text = format_position(self.position)
            st.speed_text = format_speed(self.speed)
            st.eta_text = format_duration(self.eta_s)
        return st
