"""
Component Tests for Health Check API

Tests health and info endpoints.
"""

import pytest
from fastapi.testclient import TestClient

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))


class TestHealthEndpoint:
    """Tests for /health endpoint"""

    def test_health_check_success(self, client):
        """Test health check endpoint"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "loyalty_service"
        assert data["dependencies"] == {"customer_store": "healthy"}
        assert "version" in data

    def test_health_includes_port(self, client):
        """Test health includes port"""
        response = client.get("/health")

        assert response.status_code == 200
        assert "port" in response.json()

    def test_health_degraded_before_startup(self, bare_client):
        response = bare_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"]["customer_store"] == "unhealthy"


class TestServiceInfoEndpoint:
    """Tests for /info endpoint"""

    def test_service_info_success(self, client):
        """Test service info endpoint"""
        response = client.get("/info")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "loyalty_service"
        assert data["version"] == "1.0.0"
        assert "purchase_recording" in data["capabilities"]

    def test_service_info_includes_description(self, client):
        """Test service info includes description"""
        response = client.get("/info")

        assert response.status_code == 200
        assert "description" in response.json()
