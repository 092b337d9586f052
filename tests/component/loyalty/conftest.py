"""
Component Test Fixtures for Loyalty Service

Provides fixtures for component testing with FastAPI TestClient.
The app's lifespan builds the service over the real in-memory repository
with a fixed clock, so seeding runs on the client's event loop.
"""

import pytest
from typing import Any, Dict

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.loyalty_service.customer_repository import CustomerRepository, SEED_CUSTOMERS
from microservices.loyalty_service.loyalty_service import LoyaltyService
from microservices.loyalty_service.models import CustomerStatus


FIXED_NOW = "2024-06-01T10:00:00.000Z"

NEW_CUSTOMER: Dict[str, Any] = {
    "id": 3,
    "name": "Sam New",
    "status": CustomerStatus.BRONZE,
    "points": 0,
    "last_purchase_date": "2024-01-01",
    "join_date": "2024-01-01",
    "notifications": True,
}


def create_test_loyalty_service() -> LoyaltyService:
    """Loyalty service over the seed customers plus a zero-point customer"""
    repository = CustomerRepository(seed=[*SEED_CUSTOMERS, NEW_CUSTOMER])
    return LoyaltyService(repository=repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def fixed_now() -> str:
    return FIXED_NOW


@pytest.fixture
def client(monkeypatch):
    """Create FastAPI test client; lifespan initializes the test service"""
    from fastapi.testclient import TestClient
    from microservices.loyalty_service import main

    monkeypatch.setattr(main, "create_loyalty_service", create_test_loyalty_service)
    main.app.dependency_overrides = {}

    with TestClient(main.app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def bare_client():
    """Test client without lifespan startup (service never initialized)"""
    from fastapi.testclient import TestClient
    from microservices.loyalty_service.main import app

    app.dependency_overrides = {}
    return TestClient(app, raise_server_exceptions=False)
