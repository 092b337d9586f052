"""
Unit Test Fixtures for Loyalty Service

Provides a seeded in-memory repository and a service with a fixed clock.
"""

import pytest
from typing import Any, Dict, List

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


class FixedClock:
    """Clock returning a settable timestamp"""

    def __init__(self, now: str = FIXED_NOW):
        self.now = now
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.now


@pytest.fixture
def seed_rows() -> List[Dict[str, Any]]:
    """Default seed customers plus a zero-point BRONZE customer"""
    return [*SEED_CUSTOMERS, NEW_CUSTOMER]


@pytest.fixture
async def repository(seed_rows):
    """Initialized in-memory repository"""
    repo = CustomerRepository(seed=seed_rows)
    await repo.initialize()
    yield repo
    await repo.close()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def loyalty_service(repository, clock):
    """Loyalty service wired to the in-memory repository"""
    return LoyaltyService(repository=repository, clock=clock)
