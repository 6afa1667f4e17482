from fastapi import HTTPException

from flightpath.core.errors import FlightPathError, IndexOutOfRange
from flightpath.core.logger import get_logger
from flightpath.services.session import FlightSession

log = get_logger(__name__)

_session = FlightSession()


def get_session() -> FlightSession:
    return _session


def as_http(exc: FlightPathError) -> HTTPException:
    status = 404 if isinstance(exc, IndexOutOfRange) else 400
    log.warning("rejected (%s): %s", type(exc).__name__, exc)
    return HTTPException(status, {"error": type(exc).__name__, "message": str(exc)})
