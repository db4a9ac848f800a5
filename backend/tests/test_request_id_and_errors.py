from __future__ import annotations

from fastapi.testclient import TestClient

from user_api.domain.users import User
from user_api.main import create_app
from user_api.repositories.memory_users_repo import InMemoryUserRepository


def test_request_id_is_generated_and_returned():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    r = client.get("/")
    assert r.status_code == 200
    assert "X-Request-Id" in r.headers
    assert r.headers["X-Request-Id"]


def test_request_id_is_propagated_from_client():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    r = client.get("/users", headers={"X-Request-Id": "abc-123"})
    assert r.status_code == 200
    assert r.headers.get("X-Request-Id") == "abc-123"


def test_error_responses_carry_request_id():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    r = client.put("/users", json={"email": "a@b.com"}, headers={"X-Request-Id": "rid-9"})
    assert r.status_code == 400
    assert r.headers.get("X-Request-Id") == "rid-9"
    assert r.headers.get("content-type") == "application/json"


def test_404_uses_the_error_envelope():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    r = client.get("/this-route-does-not-exist")
    assert r.status_code == 404
    assert r.headers.get("content-type") == "application/json"
    assert r.json() == {"error": "Route not found"}


def test_health_reports_store_and_table():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["store"] == "InMemoryUserRepository"
    assert body["table"]
    assert "POST /users" in body["endpoints"]


def test_unhandled_errors_are_500_with_error_envelope():
    class _Broken(InMemoryUserRepository):
        def scan(self) -> list[User]:
            raise RuntimeError("boom")

    app = create_app(repository=_Broken())
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/users")
    assert r.status_code == 500
    assert r.headers.get("content-type") == "application/json"
    # Development settings expose the message; other environments get a generic one.
    assert r.json() == {"error": "boom"}


def test_unhandled_errors_follow_the_app_settings_not_the_process_env():
    from user_api.settings import Settings

    class _Broken(InMemoryUserRepository):
        def scan(self) -> list[User]:
            raise RuntimeError("secret detail")

    prod = Settings(APP_ENV="production", USER_STORE_BACKEND="dynamodb")
    app = create_app(repository=_Broken(), settings=prod)
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/users")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_malformed_inbound_request_id_is_replaced():
    app = create_app(repository=InMemoryUserRepository())
    client = TestClient(app)

    for bad in ("has spaces in it", "x" * 129, "<script>"):
        r = client.get("/users", headers={"X-Request-Id": bad})
        rid = r.headers.get("X-Request-Id")
        assert rid and rid != bad
        assert len(rid) == 36


def test_resolve_request_id():
    from user_api.middleware.request_context import resolve_request_id

    assert resolve_request_id("  c6af9ac6-7b61-11e6-9a41-93e8deadbeef ") == "c6af9ac6-7b61-11e6-9a41-93e8deadbeef"
    assert resolve_request_id("Root=1-5759e988-bd862e3fe1be46a994272793") != "Root=1-5759e988-bd862e3fe1be46a994272793"
    assert len(resolve_request_id(None)) == 36
    assert len(resolve_request_id("")) == 36
