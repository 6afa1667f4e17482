"""Text readouts shown to the operator (distance, time, live position)."""
from __future__ import annotations
from typing import Sequence


def plain_number(value: float) -> str:
    """Shortest round-trip text for a number; integral values drop the '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_distance(meters: float) -> str:
    return f"{meters:.0f} m"


def format_duration(seconds: float) -> str:
    return f"{seconds:.1f} s"


def format_position(pos: Sequence[float]) -> str:
    lat, lng, alt = pos
    return f"Lat: {lat:.4f}, Lng: {lng:.4f}, Alt: {alt:.0f}m"


def format_speed(speed_mps: float) -> str:
    return f"{plain_number(speed_mps)} m/s"
