import logging
from datetime import datetime, timedelta, timezone

from jose import jwt


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_register_returns_created_user(client):
    r = client.post("/register", json={"username": "  alice ", "password": "secret123"})
    assert r.status_code == 201
    body = r.json()
    assert body["username"] == "alice"
    assert isinstance(body["id"], int)
    assert r.headers["location"] == f"/users/{body['id']}"
    assert "password" not in r.text and "hash" not in r.text


def test_register_validation_error(client):
    r = client.post("/register", json={"username": "ab", "password": "secret123"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"

    r = client.post("/register", json={"username": "alice", "password": "123"})
    assert r.status_code == 400


def test_register_malformed_body_is_400(client):
    r = client.post("/register", json={"username": "alice"})
    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body.password"


def test_register_twice_conflicts(client, register):
    register("alice", "secret123")
    r = client.post("/register", json={"username": "alice", "password": "different1"})
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_register_then_login_then_me(client, register):
    created = register("alice", "secret123")

    r = client.post("/login", json={"username": "alice", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["token"]

    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "username": "alice"}


def test_login_failures_look_identical(client, register):
    register("alice", "secret123")

    wrong_password = client.post("/login", json={"username": "alice", "password": "nope-nope"})
    unknown_user = client.post("/login", json={"username": "mallory", "password": "secret123"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.headers.get("www-authenticate") == unknown_user.headers.get("www-authenticate")


def test_passwords_never_logged(client, register, caplog):
    caplog.set_level(logging.DEBUG)
    register("alice", "hunter2-secret")
    client.post("/login", json={"username": "alice", "password": "hunter2-secret"})
    client.post("/login", json={"username": "alice", "password": "wrong-guess-99"})
    assert "hunter2-secret" not in caplog.text
    assert "wrong-guess-99" not in caplog.text


def test_me_requires_token(client):
    r = client.get("/me")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"
    assert r.headers["www-authenticate"] == "Bearer"


def test_me_rejects_non_bearer_scheme(client):
    r = client.get("/me", headers={"Authorization": "Basic YWxpY2U6c2VjcmV0"})
    assert r.status_code == 401


def test_me_rejects_garbage_token(client):
    r = client.get("/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_me_rejects_expired_token(client, register, settings):
    user = register("alice", "secret123")
    past = datetime.now(timezone.utc) - timedelta(hours=13)
    token = jwt.encode(
        {
            "sub": str(user["id"]),
            "name": "alice",
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": past,
            "nbf": past,
            "exp": past + timedelta(hours=12),
        },
        settings.jwt_secret_key,
        algorithm="HS256",
    )
    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_for_unknown_user_rejected(client):
    token = client.app.state.token_service.issue(9999, "ghost")
    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_malformed_login_does_not_log_password(client, caplog):
    caplog.set_level(logging.DEBUG)
    r = client.post("/login", json={"username": ["not", "a", "string"], "password": "leaky-pass-77"})
    assert r.status_code == 400
    assert "leaky-pass-77" not in caplog.text
