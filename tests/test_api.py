"""Tests for the FastAPI API."""

import os

import pytest
from fastapi.testclient import TestClient

from autoloader.config_store import CONFIG_ENV_VAR, ConfigStore
from autoloader.models import ConfigBuilder

from conftest import write_files


@pytest.fixture
def config_path(temp_dir, monkeypatch):
    path = temp_dir / "autoload.json"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    from autoloader import api

    api.get_resolver.cache_clear()
    yield path
    api.get_resolver.cache_clear()


@pytest.fixture
def api_client(temp_dir, config_path):
    """Create test client over an initialized config and a small source tree."""
    root = write_files(
        temp_dir / "lib",
        {
            "ns/sub/bar.py": "class Bar:\n    pass\n",
            "ns/foo.py": "class Foo:\n    pass\n",
        },
    )
    config = (
        ConfigBuilder()
        .set_root_directory(root / "ns")
        .enable_namespaces(strip_root=True)
        .build()
    )
    ConfigStore(config_path).init(config)

    from autoloader.api import app

    return TestClient(app)


class TestHealthCheck:
    def test_health_initialized(self, api_client):
        response = api_client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["config_initialized"] is True
        assert data["listing_state"] == "unbuilt"

    def test_health_not_initialized(self, config_path):
        from autoloader.api import app

        response = TestClient(app).get("/api/health")
        assert response.status_code == 200
        assert response.json()["config_initialized"] is False

    def test_health_broken_config(self, config_path):
        config_path.write_text("{")
        from autoloader.api import app

        data = TestClient(app).get("/api/health").json()
        assert data["status"] == "error"


class TestConfigEndpoint:
    def test_get_config(self, api_client):
        data = api_client.get("/api/config").json()
        assert data["uses_namespaces"] is True
        assert data["strip_root_namespace"] is True
        assert data["file_extension"] == ".py"

    def test_not_initialized_is_conflict(self, config_path):
        from autoloader.api import app

        response = TestClient(app).get("/api/config")
        assert response.status_code == 409
        assert response.json()["error_type"] == "ConfigNotFoundError"


class TestCandidates:
    def test_candidates(self, api_client):
        response = api_client.post("/api/candidates", json={"symbol_name": "Ns\\Sub\\Bar"})
        assert response.status_code == 200
        assert response.json()["candidates"] == [os.sep.join(["sub", "bar.py"])]

    def test_non_namespaced_has_no_candidates(self, api_client):
        response = api_client.post("/api/candidates", json={"symbol_name": "Bar"})
        assert response.json()["candidates"] == []

    def test_empty_symbol_rejected(self, api_client):
        response = api_client.post("/api/candidates", json={"symbol_name": ""})
        assert response.status_code == 422


class TestLocate:
    def test_found(self, api_client):
        data = api_client.post("/api/locate", json={"symbol_name": "Ns\\Sub\\Bar"}).json()
        assert data["outcome"] == "found"
        assert data["entry"]["filename"] == "bar.py"
        assert data["entry"]["subpath"] == "sub"

    def test_stripped_namespace_at_root(self, api_client):
        data = api_client.post("/api/locate", json={"symbol_name": "Ns\\Foo"}).json()
        assert data["outcome"] == "found"
        assert data["entry"]["subpath"] == ""

    def test_no_match(self, api_client):
        data = api_client.post("/api/locate", json={"symbol_name": "Ns\\Baz"}).json()
        assert data["outcome"] == "no_match"
        assert data["candidates"] == ["baz.py"]

    def test_no_candidates(self, api_client):
        data = api_client.post("/api/locate", json={"symbol_name": "Foo"}).json()
        assert data["outcome"] == "no_candidates"
        assert data["entry"] is None


class TestListing:
    def test_listing(self, api_client):
        data = api_client.get("/api/listing").json()
        assert data["count"] == 2
        assert [e["filename"] for e in data["entries"]] == ["foo.py", "bar.py"]

    def test_listing_is_cached(self, api_client, temp_dir):
        api_client.get("/api/listing")
        write_files(temp_dir / "lib" / "ns", {"late.py": ""})

        assert api_client.get("/api/listing").json()["count"] == 2
        assert api_client.get("/api/health").json()["listing_state"] == "cached"
