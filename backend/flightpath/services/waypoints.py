from __future__ import annotations
import math
from typing import Any, Iterator, List, Optional

from flightpath.core.errors import IndexOutOfRange, InvalidInput
from flightpath.core.logger import get_logger
from flightpath.schemas.flight import AnnotatedWaypoint, LatLngAlt, Waypoint
from flightpath.utils.geo import bearing_deg, haversine_km, travel_time_s, turn_angle_deg

log = get_logger(__name__)


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def parse_waypoint(lat: Any, lng: Any, alt: Any = None) -> Waypoint:
    """Build a Waypoint from raw operator input.
    lat/lng are required; a missing or non-numeric altitude falls back to 0."""
    la, lo = to_float(lat), to_float(lng)
    if la is None or lo is None:
        raise InvalidInput("Please enter valid latitude and longitude.")
    return Waypoint(lat=la, lng=lo, alt=to_float(alt) or 0.0)


def parse_waypoint_string(text: str) -> List[Waypoint]:
    """Parse ``lat,lng,alt|lat,lng,alt|...``.
    A fourth field per point is tolerated and ignored; turn angles are derived."""
    points: List[Waypoint] = []
    for n, chunk in enumerate((text or "").split("|"), start=1):
        chunk = chunk.strip()
        if not chunk:
            continue
        fields = [f.strip() for f in chunk.split(",")]
        if len(fields) < 2 or len(fields) > 4:
            raise InvalidInput(f"Waypoint {n}: expected lat,lng[,alt] but got {chunk!r}")
        alt = fields[2] if len(fields) > 2 else None
        if alt is not None and to_float(alt) is None:
            raise InvalidInput(f"Waypoint {n}: invalid altitude {alt!r}")
        points.append(parse_waypoint(fields[0], fields[1], alt))
    return points


def parse_speed(value: Any, default: float) -> float:
    """Constant speed in m/s; unset, non-numeric or non-positive -> default."""
    v = to_float(value)
    if v is None or v <= 0:
        return default
    return v


class WaypointStore:
    """Ordered waypoints; insertion order is the flight order."""

    def __init__(self):
        self._points: List[Waypoint] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(list(self._points))

    @property
    def points(self) -> List[Waypoint]:
        return list(self._points)

    def as_tuples(self) -> List[LatLngAlt]:
        return [p.as_tuple() for p in self._points]

    def add(self, point: Waypoint) -> int:
        self._points.append(point)
        idx = len(self._points) - 1
        log.debug("waypoint %d added: %.6f, %.6f, %.1f", idx, point.lat, point.lng, point.alt)
        return idx

    def remove_at(self, index: int) -> Waypoint:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index >= len(self._points):
            raise IndexOutOfRange(f"No waypoint at index {index}")
        removed = self._points.pop(index)
        log.debug("waypoint %d removed", index)
        return removed

    def clear(self) -> None:
        self._points.clear()

    def turn_angle(self, index: int) -> Optional[float]:
        """Turn at ``index`` against the two preceding waypoints."""
        if index < 2 or index >= len(self._points):
            return None
        p0, p1, p2 = (self._points[i].as_tuple() for i in (index - 2, index - 1, index))
        return turn_angle_deg(p0, p1, p2)

    def annotated_list(self, speed_mps: Optional[float] = None) -> List[AnnotatedWaypoint]:
        out: List[AnnotatedWaypoint] = []
        for i, p in enumerate(self._points):
            item = AnnotatedWaypoint(index=i, lat=p.lat, lng=p.lng, alt=p.alt, turn_angle_deg=self.turn_angle(i))
            if i >= 1:
                prev = self._points[i - 1].as_tuple()
                d_km = haversine_km(prev, p.as_tuple())
                item.distance_from_previous_km = d_km
                item.bearing_from_previous_deg = bearing_deg(prev, p.as_tuple())
                if speed_mps:
                    item.leg_time_s = travel_time_s(d_km, speed_mps)
            out.append(item)
        return out
