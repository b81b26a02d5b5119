"""Tests for health check endpoints."""

from unittest.mock import MagicMock

from api.dependencies import get_user_repository


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_welcome(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "Welcome to Barbershop API"
        assert data["version"] == "0.1.0"
        assert data["uptime"] >= 0
        assert "python" in data

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_check(self, client):
        """Readiness endpoint should return 200 when the database answers."""
        response = client.get("/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is False
        assert body["data"] == {"status": "ready", "database": "connected"}

    def test_readiness_check_database_down(self, app, client):
        repository = MagicMock()
        repository.ping.side_effect = ConnectionError("down")
        app.dependency_overrides[get_user_repository] = lambda: repository

        response = client.get("/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["error"] is True
        assert body["data"] == {"status": "unavailable", "database": "disconnected"}
