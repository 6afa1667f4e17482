"""Failure taxonomy shared by the services and the API layer.

Every error is raised before any state is touched, so a rejected action
leaves waypoints, trajectory and simulation exactly as they were.
"""


class FlightPathError(Exception):
    """Base class for all rejected operator actions."""


class InvalidInput(FlightPathError, ValueError):
    """Non-numeric or missing coordinate / option value."""


class IndexOutOfRange(FlightPathError, IndexError):
    """Waypoint index does not exist in the store."""


class InsufficientPoints(FlightPathError):
    """Fewer than two waypoints at trajectory calculation time."""


class PathNotReady(FlightPathError):
    """Launch attempted without a computed trajectory."""


class PathTooShort(PathNotReady):
    """Trajectory handed to the engine has fewer than two samples."""


class EmptyLog(FlightPathError):
    """Export attempted with no recorded samples."""
