from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, List, Optional, Tuple

LatLngAlt = Tuple[float, float, float]


class Waypoint(BaseModel):
    lat: float  # degrees
    lng: float  # degrees
    alt: float = 0.0  # meters

    def as_tuple(self) -> LatLngAlt:
        return (self.lat, self.lng, self.alt)


class AnnotatedWaypoint(BaseModel):
    index: int
    lat: float
    lng: float
    alt: float
    turn_angle_deg: Optional[float] = None  # only for index >= 2
    distance_from_previous_km: Optional[float] = None
    bearing_from_previous_deg: Optional[float] = None
    leg_time_s: Optional[float] = None


class SimState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class LogEntry(BaseModel):
    time: float  # seconds since launch
    lat: float
    lng: float
    alt: float
    speed: float  # m/s, configured value
    eta: float  # seconds
    dist: float  # meters traveled


class TrajectorySummary(BaseModel):
    polyline: List[LatLngAlt]
    samples: int
    total_distance_m: float
    travel_time_s: float
    speed_mps: float
    distance_text: str
    travel_time_text: str


class SimulationStatus(BaseModel):
    state: SimState
    run_id: int
    elapsed_s: float = 0.0
    progress_m: float = 0.0
    total_distance_m: float = 0.0
    position: Optional[LatLngAlt] = None
    speed_mps: Optional[float] = None
    eta_s: Optional[float] = None
    log_entries: int = 0
    position_text: str = "-"
    speed_text: str = "-"
    eta_text: str = "-"


# Request bodies. Raw values are accepted and validated by the services so that
# rejections surface as InvalidInput rather than schema errors.
class WaypointIn(BaseModel):
    lat: Any = None
    lng: Any = None
    alt: Any = None


class MapClickIn(BaseModel):
    lat: float
    lng: float


class TrajectoryRequest(BaseModel):
    speed: Any = None


class RunRequest(BaseModel):
    dt: float = Field(1 / 60, gt=0)
