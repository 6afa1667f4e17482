"""Batch run: waypoints in, readouts on stdout, resampled log CSV out.

    python -m flightpath.cli "0,0,0|0,1,500|1,1,1000" --speed 250 --interval 10
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from flightpath.core.config import DEFAULT_SPEED_MPS, EXPORT_INTERVAL, EXPORT_INTERVAL_TYPE, SIM_DIR, LOG_FILENAME
from flightpath.core.errors import FlightPathError
from flightpath.core.logger import get_logger, setup_logging
from flightpath.services.readout import format_position, format_speed, format_duration
from flightpath.services.session import FlightSession
from flightpath.services.telemetry import INTERVAL_TYPES
from flightpath.services.waypoints import parse_waypoint_string

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="flightpath", description="Simulate a flight through waypoints and export its log.")
    p.add_argument("waypoints", help="lat,lng,alt|lat,lng,alt|... (at least two points)")
    p.add_argument("--speed", default=str(DEFAULT_SPEED_MPS), help="constant speed in m/s")
    p.add_argument("--dt", type=float, default=1.0, help="simulation tick in seconds")
    p.add_argument("--interval", default=str(EXPORT_INTERVAL), help="export sampling interval")
    p.add_argument("--interval-type", choices=INTERVAL_TYPES, default=EXPORT_INTERVAL_TYPE)
    p.add_argument("--out", type=Path, default=SIM_DIR / LOG_FILENAME, help="CSV output path")
    p.add_argument("--log-level", default="WARNING")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    if args.dt <= 0:
        print("error: --dt must be positive", file=sys.stderr)
        return 2

    session = FlightSession()
    try:
        for wp in parse_waypoint_string(args.waypoints):
            session.add_point(wp.lat, wp.lng, wp.alt)
        log.info("batch run: %d waypoints, speed %s", len(session.waypoints), args.speed)
        for item in session.annotated_waypoints():
            turn = f" | Turn: {item.turn_angle_deg:.1f}°" if item.turn_angle_deg is not None else ""
            print(f"Point {item.index + 1}: Lat {item.lat:.4f}, Lng {item.lng:.4f}, Alt {item.alt:g}{turn}")

        summary = session.calculate_trajectory(args.speed)
        print(f"Total distance: {summary.distance_text}")
        print(f"Total travel time: {summary.travel_time_text}")

        status = session.run_offline(args.dt)
        print(f"Final position: {format_position(status.position)}")
        print(f"Speed: {format_speed(status.speed_mps)}")
        print(f"ETA: {format_duration(status.eta_s)}")

        path = session.export_file(args.interval, args.interval_type, args.out)
    except FlightPathError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Log written to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
