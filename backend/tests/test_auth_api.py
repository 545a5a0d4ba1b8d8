from datetime import datetime, timedelta, timezone

from notes_api.utils.jwt_auth import TokenService


def test_register_login_scenario(client):
    r = client.post("/auth/register", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 201
    data = r.json()
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["username"] == "alice"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]

    r = client.post("/auth/register", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 409

    r = client.post("/auth/login", json={"username": "alice", "password": "wrongpass"})
    assert r.status_code == 401

    r = client.post("/auth/login", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 200
    token = r.json()["token"]
    claims = client.app.state.tokens.validate(token)
    assert claims.user_id == data["user"]["id"]
    assert claims.username == "alice"


def test_unknown_user_and_wrong_password_look_the_same(client, register):
    register("alice")
    unknown = client.post("/auth/login", json={"username": "nobody", "password": "secret1"})
    wrong = client.post("/auth/login", json={"username": "alice", "password": "wrongpass"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"detail": "Invalid username or password"}


def test_register_validates_lengths(client):
    assert client.post("/auth/register", json={"username": "al", "password": "secret1"}).status_code == 422
    assert client.post("/auth/register", json={"username": "a" * 51, "password": "secret1"}).status_code == 422
    assert client.post("/auth/register", json={"username": "alice", "password": "12345"}).status_code == 422
    assert client.post("/auth/register", json={"username": "a" * 50, "password": "123456"}).status_code == 201


def test_login_requires_both_fields(client):
    assert client.post("/auth/login", json={"username": "", "password": "secret1"}).status_code == 422
    assert client.post("/auth/login", json={"username": "alice"}).status_code == 422


def test_password_is_not_stored_in_plaintext(client, settings):
    client.post("/auth/register", json={"username": "alice", "password": "secret1"})
    stored = (settings.data_dir / "users.json").read_text(encoding="utf-8")
    assert "alice" in stored
    assert "secret1" not in stored


def test_legacy_create_user_returns_record_without_token(client):
    r = client.post("/users", json={"username": "carol", "password": "secret1"})
    assert r.status_code == 201
    assert set(r.json()) == {"id", "username", "created_at"}

    r = client.post("/users", json={"username": "carol", "password": "secret1"})
    assert r.status_code == 409

    r = client.post("/auth/login", json={"username": "carol", "password": "secret1"})
    assert r.status_code == 200


def test_protected_route_requires_token(client, register):
    user_id, _ = register("alice")
    r = client.get(f"/users/{user_id}/notes")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert r.json()["detail"] == "Missing authorization header"


def test_expired_token_is_unauthorized(client, register, settings):
    user_id, _ = register("alice")
    past = TokenService(settings.token, clock=lambda: datetime.now(timezone.utc) - timedelta(days=2))
    token = past.issue(user_id, "alice")

    r = client.get(f"/users/{user_id}/notes", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid or expired token"


def test_missing_signing_key_is_internal_error(tmp_path, monkeypatch):
    from fastapi.testclient import TestClient

    from notes_api.config import Settings
    from notes_api.main import create_app

    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JWT_SECRET", "")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    client = TestClient(create_app(Settings.from_env()))

    r = client.post("/auth/register", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}

    # the username was not taken by the failed attempt
    assert not (tmp_path / "users.json").exists()
    assert client.app.state.users.find_by_username("alice") is None


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_password_with_nul_is_rejected_not_crashed(client):
    r = client.post("/auth/register", json={"username": "alice", "password": "secret\u0000x"})
    assert r.status_code == 422

    r = client.post("/users", json={"username": "alice", "password": "secret\u0000x"})
    assert r.status_code == 422

    r = client.post("/auth/login", json={"username": "alice", "password": "secret\u0000x"})
    assert r.status_code == 401


def test_unknown_user_still_runs_password_check(client, register, monkeypatch):
    register("alice")
    ctx = client.app.state.hasher._ctx
    calls = []
    real_verify = ctx.verify

    def counting_verify(*args, **kwargs):
        calls.append(args)
        return real_verify(*args, **kwargs)

    monkeypatch.setattr(ctx, "verify", counting_verify)

    assert client.post("/auth/login", json={"username": "nobody", "password": "secret1"}).status_code == 401
    assert client.post("/auth/login", json={"username": "alice", "password": "wrongpass"}).status_code == 401
    assert len(calls) == 2
