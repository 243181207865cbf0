import pytest
from fastapi.testclient import TestClient

from taskapi.core.config import Settings
from taskapi.database import create_db_engine, create_session_factory, init_db
from taskapi.main import create_app


TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, jwt_secret_key=TEST_SECRET, database_url="sqlite://")


@pytest.fixture()
def db(settings):
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client):
    def _register(username="alice", password="secret123"):
        r = client.post("/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture()
def auth_headers(client, register):
    """Registers and logs in a user, returning bearer headers for them."""
    def _auth_headers(username="alice", password="secret123"):
        register(username, password)
        r = client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}
    return _auth_headers
