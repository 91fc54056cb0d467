from fastapi.testclient import TestClient


class TestHealthEndpoints:

    def test_root(self, client: TestClient):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "running"

    def test_health(self, client: TestClient):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_ready_echoes_request_id(self, client: TestClient):
        resp = client.get("/ready", headers={"X-Request-ID": "req-123"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["request_id"] == "req-123"
        assert resp.headers["X-Request-ID"] == "req-123"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"

    def test_unknown_route_uses_error_envelope(self, client: TestClient):
        resp = client.get("/api/v1/nowhere")
        assert resp.status_code == 404
        assert resp.json()["success"] is False
