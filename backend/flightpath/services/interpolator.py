from __future__ import annotations
from typing import List, Sequence
import numpy as np

from flightpath.core.config import SPLINE_STEPS
from flightpath.core.errors import InsufficientPoints
from flightpath.core.logger import get_logger
from flightpath.schemas.flight import LatLngAlt, TrajectorySummary
from flightpath.services.readout import format_distance, format_duration
from flightpath.utils.geo import cumulative_distance_km, travel_time_s

log = get_logger(__name__)

# Uniform Catmull-Rom basis: P(t) = [1, t, t^2, t^3] @ M @ [p0, p1, p2, p3]
CATMULL_ROM = 0.5 * np.array(
    [
        [0.0, 2.0, 0.0, 0.0],
        [-1.0, 0.0, 1.0, 0.0],
        [2.0, -5.0, 4.0, -1.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
)


def catmull_rom_span(p0: LatLngAlt, p1: LatLngAlt, p2: LatLngAlt, p3: LatLngAlt, steps: int = SPLINE_STEPS) -> List[LatLngAlt]:
    """Sample the p1->p2 span at t = k/steps, k = 0..steps.
    lat, lng and alt are treated as three independent 1-D curves."""
    ctrl = np.array([p0, p1, p2, p3], dtype=float)  # 4 x 3
    t = np.arange(steps + 1, dtype=float) / steps
    basis = np.stack([np.ones_like(t), t, t * t, t * t * t], axis=1)  # (steps+1) x 4
    pts = basis @ CATMULL_ROM @ ctrl
    return [(float(lat), float(lng), float(alt)) for lat, lng, alt in pts]


def interpolate_path(points: Sequence[LatLngAlt], steps: int = SPLINE_STEPS) -> List[LatLngAlt]:
    """Dense path through ``points``.

    First and last legs stay straight and use the literal waypoints, so the
    path starts and ends exactly at the operator's coordinates. Every interior
    span i = 1..n-3 is a Catmull-Rom curve over p(i-1)..p(i+2).
    """
    n = len(points)
    if n < 2:
        raise InsufficientPoints("Add at least two points to calculate trajectory.")
    pts = [tuple(p) for p in points]
    if n == 2:
        return [pts[0], pts[1]]

    path: List[LatLngAlt] = [pts[0], pts[1]]
    for i in range(1, n - 2):
        path.extend(catmull_rom_span(pts[i - 1], pts[i], pts[i + 1], pts[i + 2], steps))
    path.append(pts[n - 2])
    path.append(pts[n - 1])
    return path


class Trajectory:
    """Interpolated path plus its cumulative distance series.

    Derived from one waypoint snapshot; the owning session drops it on any
    waypoint change.
    """

    def __init__(self, samples: List[LatLngAlt]):
        self.samples = samples
        self.cumulative_km = cumulative_distance_km(samples)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def total_distance_km(self) -> float:
        return self.cumulative_km[-1] if self.cumulative_km else 0.0

    @property
    def total_distance_m(self) -> float:
        return self.total_distance_km * 1000.0

    def travel_time_s(self, speed_mps: float) -> float:
        return travel_time_s(self.total_distance_km, speed_mps)

    def summary(self, speed_mps: float) -> TrajectorySummary:
        total_s = self.travel_time_s(speed_mps)
        return TrajectorySummary(
            polyline=list(self.samples),
            samples=len(self.samples),
            total_distance_m=self.total_distance_m,
            travel_time_s=total_s,
            speed_mps=speed_mps,
            distance_text=format_distance(self.total_distance_m),
            travel_time_text=format_duration(total_s),
        )


def build_trajectory(points: Sequence[LatLngAlt], steps: int = SPLINE_STEPS) -> Trajectory:
    traj = Trajectory(interpolate_path(points, steps))
    log.info("trajectory: %d waypoints -> %d samples, %.0f m", len(points), len(traj), traj.total_distance_m)
    return traj
