"""
- Give every test its own empty RoundStore
- Override FastAPI's get_store so routes use that store
- Provide a client fixture (TestClient(app)) that already has the override applied
"""
import pytest

from fastapi.testclient import TestClient

from decoder.main import app, get_store
from decoder.store import RoundStore

@pytest.fixture
def store() -> RoundStore:
    return RoundStore()

@pytest.fixture(autouse=True)
def override_dep(store):
    """Force the app to use the test store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    # Talks to the FastAPI app in-process; rounds land in the per-test store.
    return TestClient(app)
