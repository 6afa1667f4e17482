from __future__ import annotations
import csv
import io
from typing import Any, List, Optional

from flightpath.core.config import EXPORT_INTERVAL
from flightpath.core.errors import EmptyLog, InvalidInput
from flightpath.schemas.flight import LogEntry
from flightpath.services.readout import plain_number
from flightpath.services.waypoints import parse_speed

CSV_HEADER = ["time", "lat", "lng", "alt", "speed", "eta", "dist"]
INTERVAL_TYPES = ("seconds", "distance")


def parse_interval(value: Any, default: float = EXPORT_INTERVAL) -> float:
    # same fallback rule as speed: unset, non-numeric or non-positive -> default
    return parse_speed(value, default)


def check_interval_type(interval_type: str) -> str:
    kind = (interval_type or "").strip().lower()
    if kind not in INTERVAL_TYPES:
        raise InvalidInput(f"interval type must be one of {', '.join(INTERVAL_TYPES)}, got {interval_type!r}")
    return kind


def format_row(e: LogEntry) -> List[str]:
    return [
        f"{e.time:.2f}",
        f"{e.lat:.6f}",
        f"{e.lng:.6f}",
        f"{e.alt:.1f}",
        plain_number(e.speed),
        f"{e.eta:.1f}",
        f"{e.dist:.1f}",
    ]


class TelemetryLog:
    """Append-only record of one simulation run, one entry per tick."""

    def __init__(self):
        self._entries: List[LogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def last(self) -> Optional[LogEntry]:
        return self._entries[-1] if self._entries else None

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def clear(self) -> None:
        self._entries.clear()

    def resample(self, interval: float, interval_type: str = "seconds") -> List[LogEntry]:
        """Keep the first entry, then every entry whose time (or distance) is at
        least ``interval`` past the last kept one; the final entry is always kept."""
        kind = check_interval_type(interval_type)
        if not self._entries:
            raise EmptyLog("No log data to export. Launch the missile first.")
        key = "time" if kind == "seconds" else "dist"

        first = self._entries[0]
        kept = [first]
        last_value = getattr(first, key)
        for entry in self._entries[1:]:
            value = getattr(entry, key)
            if value - last_value >= interval:
                kept.append(entry)
                last_value = value
        if kept[-1] is not self._entries[-1]:
            kept.append(self._entries[-1])
        return kept

    def to_csv(self, interval: float, interval_type: str = "seconds") -> str:
        rows = self.resample(interval, interval_type)
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        writer.writerows(format_row(e) for e in rows)
        return buf.getvalue()
