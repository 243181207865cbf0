from fastapi.testclient import TestClient

from taskapi.core.errors import ConflictError, NotFoundError
from taskapi.main import create_app


def test_unexpected_exception_is_generic_500(settings):
    app = create_app(settings)

    @app.get("/explode")
    def explode():
        raise RuntimeError("db password is hunter2")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/explode")

    assert r.status_code == 500
    assert r.json() == {
        "error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}
    }
    assert "hunter2" not in r.text
    assert "RuntimeError" not in r.text


def test_domain_errors_keep_their_status(settings):
    app = create_app(settings)

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Username already exists")

    @app.get("/missing")
    def missing():
        raise NotFoundError("Todo not found")

    with TestClient(app) as client:
        r = client.get("/conflict")
        assert r.status_code == 409
        assert r.json() == {"error": {"code": "CONFLICT", "message": "Username already exists"}}

        r = client.get("/missing")
        assert r.status_code == 404
        assert "www-authenticate" not in r.headers
