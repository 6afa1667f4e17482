from fastapi import APIRouter, Depends

from flightpath.api.deps import as_http, get_session
from flightpath.core.errors import FlightPathError
from flightpath.schemas.flight import TrajectoryRequest, TrajectorySummary
from flightpath.services.session import FlightSession

router = APIRouter(prefix="/api/trajectory", tags=["trajectory"])


@router.post("", response_model=TrajectorySummary)
async def calculate_trajectory(req: TrajectoryRequest, session: FlightSession = Depends(get_session)):
    try:
        return session.calculate_trajectory(req.speed)
    except FlightPathError as e:
        raise as_http(e)


@router.get("", response_model=TrajectorySummary)
async def current_trajectory(session: FlightSession = Depends(get_session)):
    try:
        return session.trajectory_summary()
    except FlightPathError as e:
        raise as_http(e)
