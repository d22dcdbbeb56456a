"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from py_polymap.api.main import app
from py_polymap.config import settings


class TestAPIEndpoints:
    """Test the map generation endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        """Test that the root endpoint reports the service."""
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        """Test that the health endpoint reports healthy."""
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_defaults(self):
        """Test that the default options are served."""
        response = self.client.get("/maps/defaults")
        assert response.status_code == 200
        data = response.json()
        assert data["num_polygons"] == settings.default_num_polygons
        assert data["seed"] is None

    def test_generate_map(self):
        """Test that a generated map is returned in full."""
        payload = {"width": 300, "height": 300, "num_polygons": 60, "seed": "api-seed"}
        response = self.client.post("/maps/generate", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["seed"] == "api-seed"
        assert len(data["graph"]["centers"]) == 60
        assert "generation_time_seconds" in data

    def test_generate_is_reproducible(self):
        """Test that the same seed returns the same map."""
        payload = {"width": 300, "height": 300, "num_polygons": 60, "seed": "repeat"}
        first = self.client.post("/maps/generate", json=payload).json()
        second = self.client.post("/maps/generate", json=payload).json()
        first.pop("generation_time_seconds")
        second.pop("generation_time_seconds")
        assert first == second

    def test_too_many_polygons_rejected(self):
        """Test that oversized requests are rejected."""
        payload = {"width": 300, "height": 300, "num_polygons": settings.max_num_polygons + 1}
        response = self.client.post("/maps/generate", json=payload)
        assert response.status_code == 400

    def test_invalid_dimensions_rejected(self):
        """Test that invalid dimensions are rejected."""
        response = self.client.post("/maps/generate", json={"width": 0, "height": 300})
        assert response.status_code == 422
