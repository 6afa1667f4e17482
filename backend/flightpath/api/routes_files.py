from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from flightpath.api.deps import as_http, get_session
from flightpath.core.config import EXPORT_INTERVAL, EXPORT_INTERVAL_TYPE, LOG_FILENAME
from flightpath.core.errors import FlightPathError
from flightpath.services.session import FlightSession

router = APIRouter()


@router.get("/api/export")
async def export_log(
    interval: str = Query(str(EXPORT_INTERVAL)),
    interval_type: str = Query(EXPORT_INTERVAL_TYPE),
    session: FlightSession = Depends(get_session),
):
    """Resampled run log as a CSV download; a copy is kept under SIM_DIR."""
    try:
        path = session.export_file(interval, interval_type)
    except FlightPathError as e:
        raise as_http(e)
    return Response(
        content=path.read_text(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{LOG_FILENAME}"'},
    )
