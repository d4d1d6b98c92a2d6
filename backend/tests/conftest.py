# tests/conftest.py

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Put the backend root on sys.path so the ballmill package imports without installing
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from ballmill.core.rate_limit import limiter  # noqa: E402
from ballmill.core.settings import settings  # noqa: E402
from ballmill.main import app  # noqa: E402
from ballmill.services.design_sessions import reset_sessions  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_state():
    """
    Reset shared in-process state before each test:
    rate limiter counters and design assistant sessions.
    Generation phases run without delay.
    """
    settings.generation_step_delay_s = 0
    limiter.reset()
    reset_sessions()
    yield


@pytest.fixture()
def client() -> TestClient:
    """
    HTTP client fixture for the FastAPI application.
    """
    with TestClient(app) as c:
        yield c
