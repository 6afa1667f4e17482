from __future__ import annotations
from pathlib import Path
from typing import Optional

from flightpath.core.config import LOG_FILENAME, SIM_DIR
from flightpath.core.logger import get_logger
from flightpath.services.telemetry import TelemetryLog
from flightpath.utils.io import write_atomic_text

log = get_logger(__name__)


def write_log_csv(
    telemetry: TelemetryLog,
    interval: float,
    interval_type: str = "seconds",
    out_path: Optional[Path] = None,
) -> Path:
    """Resample the run log and write it as CSV (``missile_log.csv`` under SIM_DIR by default)."""
    csv_text = telemetry.to_csv(interval, interval_type)
    path = write_atomic_text(csv_text, out_path or SIM_DIR / LOG_FILENAME)
    log.info("log exported: %s (%d rows)", path, csv_text.count("\n") - 1)
    return path
