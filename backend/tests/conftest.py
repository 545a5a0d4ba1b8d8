import pytest
from fastapi.testclient import TestClient

from notes_api.config import Settings
from notes_api.main import create_app


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    return Settings.from_env()


@pytest.fixture()
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture()
def register(client):
    """Register a user and return (user_id, auth headers)."""

    def _register(username: str, password: str = "secret1"):
        r = client.post("/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        data = r.json()
        return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}

    return _register
