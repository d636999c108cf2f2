"""HTTP contract of the /webhooks endpoints."""
import pytest

from api import create_app


class TestAuthGuard:
    def test_missing_header(self, client):
        resp = client.get("/api/v1/webhooks")
        assert resp.status_code == 401
        assert resp.get_json()["message"] == "No authorization header"

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer "])
    def test_malformed_header(self, client, header):
        resp = client.get("/api/v1/webhooks", headers={"Authorization": header})
        assert resp.status_code == 401

    def test_refresh_token_is_not_a_bearer(self, client, auth_headers):
        login = client.post("/api/v1/auth/login", json={"username": "bob", "password": "hunter22"})
        refresh = login.get_json()["data"]["refreshToken"]
        resp = client.get("/api/v1/webhooks", headers={"Authorization": f"Bearer {refresh}"})
        assert resp.status_code == 401


class TestCreate:
    def test_created_returns_id(self, client, auth_headers):
        resp = client.post(
            "/api/v1/webhooks",
            json={"source": "github", "event": "push", "payload": {"ref": "refs/heads/main"}},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["statusCode"] == 201
        assert set(body["data"]) == {"id"}

        fetched = client.get(f"/api/v1/webhooks/{body['data']['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        data = fetched.get_json()["data"]
        assert data["source"] == "github"
        assert data["event"] == "push"
        assert data["payload"] == {"ref": "refs/heads/main"}
        assert "receivedAt" in data

    @pytest.mark.parametrize(
        "body",
        [
            {"event": "push", "payload": {}},
            {"source": "github", "payload": {}},
            {"source": "github", "event": "push"},
            {"source": "", "event": "push", "payload": {}},
            {"source": "github", "event": "   ", "payload": {}},
        ],
    )
    def test_invalid_body(self, client, auth_headers, body):
        resp = client.post("/api/v1/webhooks", json=body, headers=auth_headers)
        assert resp.status_code == 400


class TestList:
    def _ingest(self, client, headers, n):
        for i in range(n):
            client.post(
                "/api/v1/webhooks",
                json={"source": "github", "event": f"e{i}", "payload": {"i": i}},
                headers=headers,
            )

    def test_envelope_and_pagination(self, client, auth_headers):
        self._ingest(client, auth_headers, 3)
        resp = client.get("/api/v1/webhooks?page=2&limit=2", headers=auth_headers)
        assert resp.status_code == 200
        body = resp.get_json()
        assert set(body) == {"data", "message", "statusCode", "timestamp"}
        assert len(body["data"]["data"]) == 1
        assert body["data"]["pagination"] == {
            "page": 2,
            "limit": 2,
            "totalItems": 3,
            "totalPages": 2,
            "hasNextPage": False,
            "hasPreviousPage": True,
        }

    def test_newest_first(self, client, auth_headers):
        self._ingest(client, auth_headers, 3)
        data = client.get("/api/v1/webhooks", headers=auth_headers).get_json()["data"]["data"]
        assert [w["event"] for w in data] == ["e2", "e1", "e0"]

    def test_defaults(self, client, auth_headers):
        pagination = client.get("/api/v1/webhooks", headers=auth_headers).get_json()["data"]["pagination"]
        assert pagination["page"] == 1
        assert pagination["limit"] == 10
        assert pagination["totalItems"] == 0

    @pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101", "page=abc"])
    def test_invalid_query(self, client, auth_headers, query):
        resp = client.get(f"/api/v1/webhooks?{query}", headers=auth_headers)
        assert resp.status_code == 400

    def test_filter_by_event(self, client, auth_headers):
        self._ingest(client, auth_headers, 3)
        body = client.get("/api/v1/webhooks?event=e1", headers=auth_headers).get_json()["data"]
        assert [w["event"] for w in body["data"]] == ["e1"]

    def test_count(self, client, auth_headers):
        self._ingest(client, auth_headers, 2)
        resp = client.get("/api/v1/webhooks/count", headers=auth_headers)
        assert resp.get_json()["data"] == {"count": 2}


class TestGet:
    def test_not_found(self, client, auth_headers):
        resp = client.get("/api/v1/webhooks/nope", headers=auth_headers)
        assert resp.status_code == 404
        body = resp.get_json()
        assert body["error"] == "NOT_FOUND"
        assert body["message"] == "Webhook not found"


class TestAppSurface:
    def test_health(self, client):
        assert client.get("/api/v1/health").get_json() == {"status": "ok", "version": "1.0.0"}

    def test_unknown_route(self, client):
        resp = client.get("/api/v1/nothing-here")
        assert resp.status_code == 404
        assert resp.get_json()["statusCode"] == 404

    def test_rate_limit(self):
        # Default window from config: 10 requests per 60 seconds per client
        app = create_app("testing", RATELIMIT_ENABLED=True)
        client = app.test_client()
        responses = [
            client.post("/api/v1/auth/login", json={"username": "x", "password": "y"})
            for _ in range(11)
        ]
        assert [r.status_code for r in responses[:10]] == [401] * 10
        assert responses[10].status_code == 429
        assert responses[10].get_json()["error"] == "TOO_MANY_REQUESTS"
