"""
Tests for the health check endpoint.
"""

from unittest.mock import patch

import pytest
from django.urls import reverse


@pytest.mark.django_db
class TestHealthCheck:
    def test_healthy(self, client):
        response = client.get(reverse("health_check"))

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "database": "connected",
            "cache": "connected",
        }

    def test_database_down_returns_503(self, client):
        with patch("core.views._database_ok", return_value=False):
            response = client.get(reverse("health_check"))

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_cache_down_is_reported_but_healthy(self, client):
        with patch("core.views._cache_ok", return_value=False):
            response = client.get(reverse("health_check"))

        assert response.status_code == 200
        assert response.json()["cache"] == "disconnected"
