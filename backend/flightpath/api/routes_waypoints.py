from fastapi import APIRouter, Body, Depends

from flightpath.api.deps import as_http, get_session
from flightpath.core.errors import FlightPathError
from flightpath.schemas.flight import MapClickIn, WaypointIn
from flightpath.services.session import FlightSession

router = APIRouter(prefix="/api", tags=["waypoints"])


def _listing(session: FlightSession):
    return {"count": len(session.waypoints), "points": [p.model_dump() for p in session.annotated_waypoints()]}


@router.get("/waypoints")
async def list_waypoints(session: FlightSession = Depends(get_session)):
    return _listing(session)


@router.post("/waypoints")
async def add_waypoint(payload: WaypointIn, session: FlightSession = Depends(get_session)):
    try:
        idx = session.add_point(payload.lat, payload.lng, payload.alt)
    except FlightPathError as e:
        raise as_http(e)
    return {"index": idx, **_listing(session)}


@router.post("/waypoints/map-click")
async def map_click(payload: MapClickIn, session: FlightSession = Depends(get_session)):
    idx = session.add_from_map(payload.lat, payload.lng)
    return {"added": idx is not None, "index": idx, **_listing(session)}


@router.post("/map-click/toggle")
async def toggle_map_click(payload: dict = Body(default={}), session: FlightSession = Depends(get_session)):
    if "alt" in payload:
        session.set_map_alt(payload.get("alt"))
    enabled = session.toggle_map_click()
    return {"map_click_mode": enabled, "map_alt": session.map_alt}


@router.delete("/waypoints/{index}")
async def delete_waypoint(index: int, session: FlightSession = Depends(get_session)):
    try:
        removed = session.remove_point(index)
    except FlightPathError as e:
        raise as_http(e)
    return {"removed": removed.model_dump(), **_listing(session)}


@router.delete("/waypoints")
async def clear_waypoints(session: FlightSession = Depends(get_session)):
    session.clear()
    return {"status": "ok", **_listing(session)}
