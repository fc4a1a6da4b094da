import importlib
import json
import logging

from fastapi.testclient import TestClient


def make_app(tmp_path, monkeypatch, cfg):
    cfg_path = tmp_path / "auth.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")
    for name in ("JWT_SECRET", "JWT_DEBUG", "DEFAULT_ADMIN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AUTH_CONFIG_PATH", str(cfg_path))

    import auth.config as auth_config
    importlib.reload(auth_config)
    import main
    return main.create_app()


CFG = {
    "jwt_secret": "main-secret",
    "users": [{"username": "admin", "password": "password", "user_id": "1", "role": "admin"}],
    "cors": ["http://localhost:8080"],
}


def test_health(tmp_path, monkeypatch):
    with TestClient(make_app(tmp_path, monkeypatch, CFG)) as client:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"
        assert resp.json()["timestamp"]


def test_full_flow(tmp_path, monkeypatch):
    with TestClient(make_app(tmp_path, monkeypatch, CFG)) as client:
        login = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
        assert login.status_code == 200, login.text
        token = login.json()["token"]

        profile = client.get("/api/user/profile", headers={"Authorization": f"Bearer {token}"})
        assert profile.status_code == 200
        assert profile.json()["username"] == "admin"

        data = client.get("/api/user/data", headers={"Authorization": f"Bearer {token}"})
        assert data.status_code == 200

        denied = client.get("/api/user/data")
        assert denied.status_code == 401


def test_cors_origin_from_config(tmp_path, monkeypatch):
    with TestClient(make_app(tmp_path, monkeypatch, CFG)) as client:
        resp = client.options(
            "/api/auth/login",
            headers={"Origin": "http://localhost:8080", "Access-Control-Request-Method": "POST"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:8080"


def test_lifespan_applies_debug_level_to_auth_logger(tmp_path, monkeypatch):
    with TestClient(make_app(tmp_path, monkeypatch, dict(CFG, jwt_debug=True))):
        assert logging.getLogger("auth").level == logging.DEBUG
        assert logging.getLogger("auth.jwt").isEnabledFor(logging.DEBUG)

    with TestClient(make_app(tmp_path, monkeypatch, dict(CFG, jwt_debug=False))):
        assert logging.getLogger("auth").level == logging.INFO
        assert not logging.getLogger("auth.jwt").isEnabledFor(logging.DEBUG)
