"""HTTP contract of the /auth endpoints."""
from datetime import datetime


def _register(client, username="zoe", password="pa55word"):
    return client.post("/api/v1/auth/register", json={"username": username, "password": password})


def _login(client, username="zoe", password="pa55word"):
    return client.post("/api/v1/auth/login", json={"username": username, "password": password})


class TestRegister:
    def test_created(self, client):
        resp = _register(client)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["statusCode"] == 201
        assert body["message"] == "User registered successfully"
        assert body["data"] == {"message": "User registered successfully"}
        assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None

    def test_duplicate(self, client):
        _register(client)
        resp = _register(client)
        assert resp.status_code == 409
        body = resp.get_json()
        assert body["error"] == "CONFLICT"
        assert body["statusCode"] == 409

    def test_missing_password(self, client):
        resp = client.post("/api/v1/auth/register", json={"username": "zoe"})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "VALIDATION_ERROR"
        assert "password" in body["details"]

    def test_username_too_long(self, client):
        resp = _register(client, username="x" * 31)
        assert resp.status_code == 400

    def test_no_body(self, client):
        resp = client.post("/api/v1/auth/register")
        assert resp.status_code == 400


class TestLogin:
    def test_success_shape(self, client):
        _register(client)
        resp = _login(client)
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert set(data) == {"user", "accessToken", "refreshToken"}
        assert set(data["user"]) == {"username", "createdAt", "updatedAt"}
        assert data["user"]["username"] == "zoe"

    def test_password_hash_never_returned(self, client):
        _register(client)
        resp = _login(client)
        assert "password" not in resp.get_data(as_text=True).lower()

    def test_bad_credentials(self, client):
        _register(client)
        resp = _login(client, password="nope")
        assert resp.status_code == 401
        assert resp.get_json()["message"] == "Invalid credentials"


class TestRefresh:
    def test_rotation(self, client):
        _register(client)
        refresh_token = _login(client).get_json()["data"]["refreshToken"]

        resp = client.post("/api/v1/auth/refresh", json={"refreshToken": refresh_token})
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert set(data) == {"accessToken", "refreshToken"}

        again = client.post("/api/v1/auth/refresh", json={"refreshToken": refresh_token})
        assert again.status_code == 401
        assert again.get_json()["message"] == "Refresh token not found"

    def test_missing_field(self, client):
        resp = client.post("/api/v1/auth/refresh", json={})
        assert resp.status_code == 400

    def test_garbage(self, client):
        resp = client.post("/api/v1/auth/refresh", json={"refreshToken": "garbage"})
        assert resp.status_code == 401

    def test_error_does_not_echo_token(self, client):
        resp = client.post("/api/v1/auth/refresh", json={"refreshToken": "abc.def.ghi"})
        assert "abc.def.ghi" not in resp.get_data(as_text=True)


class TestSession:
    def test_me(self, client, auth_headers):
        resp = client.get("/api/v1/auth/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["username"] == "bob"

    def test_logout_revokes_refresh_tokens(self, client):
        _register(client)
        tokens = _login(client).get_json()["data"]
        headers = {"Authorization": f"Bearer {tokens['accessToken']}"}

        resp = client.post("/api/v1/auth/logout", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"] == {"message": "Logged out successfully"}

        resp = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
        assert resp.status_code == 401

    def test_logout_requires_token(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 401
