from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pydantic.alias_generators import to_camel

import config
from main import app
from storage import Storage, get_storage
from utils.defaults import SETTINGS_DEFAULTS


@pytest.fixture
def down_storage(tmp_path):
    """Storage whose database file lives in a directory that does not exist."""
    store = Storage.from_url(f"sqlite:///{tmp_path / 'missing' / 'phoenix.db'}")
    yield store
    store.dispose()


@pytest.fixture
def down_client(down_storage):
    app.dependency_overrides[get_storage] = lambda: down_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_storage, None)


def test_lists_degrade_to_empty(down_client):
    for path in ("/api/categories", "/api/subcategories", "/api/plans", "/api/faqs", "/api/team-members"):
        response = down_client.get(path)
        assert response.status_code == 503, path
        assert response.json() == [], path


def test_settings_degrade_to_defaults(down_client):
    response = down_client.get("/api/settings")

    assert response.status_code == 503
    assert response.json() == {to_camel(k): v for k, v in SETTINGS_DEFAULTS.items()}


def test_about_degrades_to_defaults(down_client):
    response = down_client.get("/api/about")

    assert response.status_code == 503
    assert response.json()["companyName"] == "Phoenix Cloud"


def test_other_operations_report_unavailable(down_client, monkeypatch):
    monkeypatch.setattr(config, "ADMIN_AUTH_REQUIRED", False)

    assert down_client.get("/api/plans/some-id").json() == {"error": "Database unavailable"}
    response = down_client.post("/api/faqs", json={"question": "q", "answer": "a"})
    assert response.status_code == 503
    assert response.json() == {"error": "Database unavailable"}


def test_login_reports_unavailable(down_client):
    response = down_client.post("/api/admin/login", json={"username": "admin", "password": "admin123"})

    assert response.status_code == 503


def test_health_reports_database_down(down_client):
    response = down_client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "down"


def test_verify_admin_never_raises(down_storage):
    assert down_storage.verify_admin("admin", "admin123") is False


def test_unexpected_errors_are_500(storage, monkeypatch):
    def boom():
        raise RuntimeError("kaputt")

    monkeypatch.setattr(storage, "list_faqs", boom)
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/faqs")
    finally:
        app.dependency_overrides.pop(get_storage, None)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
