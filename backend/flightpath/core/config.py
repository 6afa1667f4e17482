from pathlib import Path
import os

# Directories
BASE_DIR = Path(__file__).resolve().parent.parent
SIM_DIR = Path(os.getenv("FLIGHTPATH_SIM_DIR", str(BASE_DIR / "simulator")))
SIM_DIR.mkdir(parents=True, exist_ok=True)

LOG_FILENAME = "missile_log.csv"
LOG_LEVEL = os.getenv("FLIGHTPATH_LOG_LEVEL", "INFO")

# Simulation defaults (ENV -> fallback)
DEFAULT_SPEED_MPS = float(os.getenv("FLIGHTPATH_DEFAULT_SPEED", "1.0"))
SPLINE_STEPS = int(os.getenv("FLIGHTPATH_SPLINE_STEPS", "20"))
FRAME_RATE_HZ = float(os.getenv("FLIGHTPATH_FRAME_RATE", "60"))

# Export defaults
EXPORT_INTERVAL = float(os.getenv("FLIGHTPATH_EXPORT_INTERVAL", "1.0"))
EXPORT_INTERVAL_TYPE = os.getenv("FLIGHTPATH_EXPORT_TYPE", "seconds")

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "FLIGHTPATH_CORS_ORIGINS",
        "http://localhost:3000,https://localhost:3000,http://localhost:5173",
    ).split(",")
    if o.strip()
]
