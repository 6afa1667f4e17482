from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from flightpath.api.routes_waypoints import router as waypoints_router
from flightpath.api.routes_trajectory import router as trajectory_router
from flightpath.api.routes_simulation import router as simulation_router
from flightpath.api.routes_files import router as files_router
from flightpath.core.logger import get_logger, setup_logging
from flightpath.core.config import CORS_ORIGINS, DEFAULT_SPEED_MPS, FRAME_RATE_HZ, SIM_DIR, SPLINE_STEPS

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="FlightPath Simulator", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(waypoints_router)
app.include_router(trajectory_router)
app.include_router(simulation_router)
app.include_router(files_router)

@app.get("/")
async def root():
    return {"message": "FlightPath API running", "docs": "/docs"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup():
    logger.info("============================================")
    logger.info("FlightPath API Starting")
    logger.info("default speed: %s m/s", DEFAULT_SPEED_MPS)
    logger.info("spline steps:  %d, frame rate: %s Hz", SPLINE_STEPS, FRAME_RATE_HZ)
    logger.info("SIM dir: %s", SIM_DIR)
    logger.info("============================================")
