# backend/tests/conftest.py
import os
import sys
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Keep tests on the in-memory store and default factors
os.environ.setdefault("RECORD_STORE", "memory")

# Import app only after setting env
from main import app
from models.emissions import EmissionFactors
from services.ai.groq_client import GroqChatClient
from services.bootstrap import attach_store
from services.store.memory_store import InMemoryRecordStore

@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def store(client):
    """A fresh, empty store (and resubscribed state) for each test."""
    s = InMemoryRecordStore()
    attach_store(app, s)
    return s


@pytest.fixture()
def groq(client):
    """Point the app at a keyed Groq client; pair with respx to mock the HTTP call."""
    previous = app.state.ai_client
    app.state.ai_client = GroqChatClient(api_key="test-key")
    yield app.state.ai_client
    app.state.ai_client = previous


@pytest.fixture(scope="session")
def factors():
    return EmissionFactors(
        electricity=0.82, diesel=2.68, coal=2.42, natural_gas=2.0, propane=1.53
    )

