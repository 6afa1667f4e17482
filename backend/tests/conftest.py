import math

import pytest

from flightpath.services.session import FlightSession
from flightpath.services.simulation import SimulationEngine

# longitude span of ~1 km along the equator
LNG_1KM = math.degrees(1.0 / 6371.0)


@pytest.fixture(autouse=True)
def sim_dir(tmp_path, monkeypatch):
    """Keep exported logs out of the package tree."""
    monkeypatch.setattr("flightpath.services.writer.SIM_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def km_path():
    """Straight 1 km path on the equator, climbing 1000 m."""
    return [(0.0, 0.0, 0.0), (0.0, LNG_1KM, 1000.0)]


@pytest.fixture
def engine():
    return SimulationEngine()


@pytest.fixture
def session():
    return FlightSession(default_speed=1.0)


@pytest.fixture
def two_point_session(session):
    session.add_point(0, 0, 0)
    session.add_point(0, 1, 0)
    return session


@pytest.fixture
def client(session):
    from fastapi.testclient import TestClient

    from flightpath.api.deps import get_session
    from flightpath.main import app

    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
