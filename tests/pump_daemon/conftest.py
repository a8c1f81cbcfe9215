import pytest
from fastapi.testclient import TestClient

from pump_daemon.main import app
from pump_decoder import PumpModelStore


@pytest.fixture
def client() -> TestClient:
    """
    Synchronous TestClient fixture for FastAPI.

    Used without a `with` block, so the lifespan handler does not run and
    the session state set up by `reset_app_state` is used as-is.
    """
    return TestClient(app=app, base_url="http://test")


@pytest.fixture(autouse=True)
def reset_app_state():
    """
    Automatically reset the daemon's pump session before each test.
    """
    import pump_daemon.app_state as app_state

    app_state.model_store = PumpModelStore()
    app_state.converter = None
    yield
    app_state.model_store = PumpModelStore()
    app_state.converter = None
