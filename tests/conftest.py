"""Shared fixtures.

- app: Flask app configured for testing (fresh in-memory SQLite per test)
- client: Flask test client
- token_manager / auth_service / webhook_service: the services built by create_app
- auth_headers: bearer header for a registered, logged-in user
"""
import pytest

from api import create_app
from models import storage


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token_manager(app):
    return app.extensions["token_manager"]


@pytest.fixture
def auth_service(app):
    return app.extensions["auth_service"]


@pytest.fixture
def webhook_service(app):
    return app.extensions["webhook_service"]


@pytest.fixture
def registered_user(auth_service):
    auth_service.register("alice", "s3cret-pass")
    return auth_service.users.find_by_username("alice")


@pytest.fixture
def auth_headers(client):
    client.post("/api/v1/auth/register", json={"username": "bob", "password": "hunter22"})
    resp = client.post("/api/v1/auth/login", json={"username": "bob", "password": "hunter22"})
    token = resp.get_json()["data"]["accessToken"]
    return {"Authorization": f"Bearer {token}"}
