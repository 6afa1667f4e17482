from fastapi import APIRouter, Body, Depends

from flightpath.api.deps import as_http, get_session
from flightpath.core.errors import FlightPathError
from flightpath.schemas.flight import RunRequest, SimulationStatus
from flightpath.services.session import FlightSession

router = APIRouter(prefix="/api/simulation", tags=["simulation"])


@router.post("/launch", response_model=SimulationStatus)
async def launch(payload: dict = Body(default={}), session: FlightSession = Depends(get_session)):
    try:
        session.launch_live(payload.get("speed"))
    except FlightPathError as e:
        raise as_http(e)
    return session.status()


@router.post("/run", response_model=SimulationStatus)
async def run_to_completion(req: RunRequest, session: FlightSession = Depends(get_session)):
    """Fly the whole trajectory with fixed-size ticks and return the final state."""
    try:
        return session.run_offline(req.dt)
    except FlightPathError as e:
        raise as_http(e)


@router.post("/reset", response_model=SimulationStatus)
async def reset(session: FlightSession = Depends(get_session)):
    session.reset()
    return session.status()


@router.get("/status", response_model=SimulationStatus)
async def status(session: FlightSession = Depends(get_session)):
    return session.status()
