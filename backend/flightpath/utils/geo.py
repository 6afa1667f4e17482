from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple

EARTH_R_KM = 6371.0  # spherical Earth radius in kilometers

LatLngAlt = Tuple[float, float, float]


def haversine_km(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Great-circle distance (kilometers) ignoring altitude.

    Accepts (lat, lng) or (lat, lng, alt) sequences in degrees; only the first
    two components are used.
    """
    lat1, lon1 = math.radians(p1[0]), math.radians(p1[1])
    lat2, lon2 = math.radians(p2[0]), math.radians(p2[1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    a = min(1.0, a)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_R_KM * c


def cumulative_distance_km(poly: Sequence[Sequence[float]]) -> List[float]:
    """Running great-circle distance from sample 0 to each sample.
    Same length as ``poly``; first value is 0 and the series never decreases."""
    if not poly:
        return []
    out = [0.0]
    total = 0.0
    for i in range(1, len(poly)):
        total += haversine_km(poly[i - 1], poly[i])
        out.append(total)
    return out


def turn_angle_deg(p0: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> Optional[float]:
    """Angle between (p0->p1) and (p1->p2) on the raw lat/lng plane.

    0 means straight continuation, 180 a reversal. Returns None when either
    leg has zero length.
    """
    v1 = (p1[0] - p0[0], p1[1] - p0[1])
    v2 = (p2[0] - p1[0], p2[1] - p1[1])
    mag1 = math.hypot(*v1)
    mag2 = math.hypot(*v2)
    if mag1 == 0 or mag2 == 0:
        return None
    cos_a = (v1[0] * v2[0] + v1[1] * v2[1]) / (mag1 * mag2)
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_a))))


def bearing_deg(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Initial great-circle bearing from p1 to p2, in [0, 360)."""
    lat1, lon1 = math.radians(p1[0]), math.radians(p1[1])
    lat2, lon2 = math.radians(p2[0]), math.radians(p2[1])

    dlon = lon2 - lon1
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def travel_time_s(distance_km: float, speed_mps: float) -> float:
    """Seconds needed to cover ``distance_km`` at constant ``speed_mps``."""
    return distance_km * 1000.0 / speed_mps


def lerp_lla(a: LatLngAlt, b: LatLngAlt, frac: float) -> LatLngAlt:
    return (
        a[0] + (b[0] - a[0]) * frac,
        a[1] + (b[1] - a[1]) * frac,
        a[2] + (b[2] - a[2]) * frac,
    )
