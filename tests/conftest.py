import os
import sys

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# ⚙️ must be set before config.py is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_AUTH_REQUIRED"] = "1"
os.environ["DEFAULT_ADMIN_USERNAME"] = "admin"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin123"
os.environ["SESSION_HTTPS_ONLY"] = "0"

from database import create_db_engine  # noqa: E402
from main import app  # noqa: E402
from storage import Storage, get_storage  # noqa: E402

ADMIN_CREDENTIALS = {"username": "admin", "password": "admin123"}


@pytest.fixture
def storage():
    """Fresh in-memory database per test."""
    store = Storage(create_db_engine("sqlite://"))
    yield store
    store.dispose()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def admin_client(client):
    """Client holding a logged-in admin session."""
    response = client.post("/api/admin/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200, response.text
    return client


@pytest_asyncio.fixture
async def async_client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_storage, None)
