"""
Loyalty Service Data Repository

Data access layer - in-process customer store.
Customers are seeded on initialize() and live for the process lifetime.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from .models import Customer, CustomerStatus
from .protocols import CustomerNotFoundError

logger = logging.getLogger(__name__)


# Initial customer set loaded at startup
SEED_CUSTOMERS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "John Smith",
        "status": CustomerStatus.SILVER,
        "points": 450,
        "last_purchase_date": "2024-02-15",
        "join_date": "2023-06-15",
        "notifications": True,
        "preferred_store": "Downtown",
    },
    {
        "id": 2,
        "name": "Jane Doe",
        "status": CustomerStatus.GOLD,
        "points": 850,
        "last_purchase_date": "2024-03-01",
        "email": "jane.doe@email.com",
        "join_date": "2023-01-20",
        "notifications": False,
    },
]

# Attributes a preferences update may overwrite
PREFERENCE_FIELDS = ("notifications", "preferred_store", "email")


class CustomerRepository:
    """Customer repository - in-memory mapping from id to customer"""

    def __init__(self, seed: Optional[Iterable[Dict[str, Any]]] = None):
        self._seed = list(SEED_CUSTOMERS if seed is None else seed)
        self._customers: Dict[int, Customer] = {}
        self._locks: Dict[int, asyncio.Lock] = {}
        self._ready = False

    async def initialize(self):
        """Load the seed customers"""
        self._customers = {}
        self._locks = {}
        for row in self._seed:
            customer = Customer(**row)
            if customer.id in self._customers:
                raise ValueError(f"Duplicate customer id in seed data: {customer.id}")
            self._customers[customer.id] = customer
            self._locks[customer.id] = asyncio.Lock()
        self._ready = True
        logger.info(f"Customer repository initialized with {len(self._customers)} customers")

    async def close(self):
        """Drop all customers"""
        self._customers.clear()
        self._locks.clear()
        self._ready = False
        logger.info("Customer repository closed")

    def is_ready(self) -> bool:
        return self._ready

    def lock(self, customer_id: int) -> asyncio.Lock:
        """Per-customer lock; unknown ids get a throwaway lock"""
        return self._locks.get(customer_id) or asyncio.Lock()

    # ====================
    # Reads
    # ====================

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID"""
        customer = self._customers.get(customer_id)
        return customer.model_copy() if customer else None

    async def count_customers(self) -> int:
        return len(self._customers)

    # ====================
    # Mutations
    # ====================

    async def add_points(self, customer_id: int, points: int, purchased_at: str) -> Customer:
        """Add points and stamp the purchase date"""
        customer = self._require(customer_id)
        customer.points += points
        customer.last_purchase_date = purchased_at
        return customer.model_copy()

    async def update_status(
        self,
        customer_id: int,
        status: CustomerStatus,
        changed_at: str
    ) -> Customer:
        """Set status and stamp the status change"""
        customer = self._require(customer_id)
        customer.status = status
        customer.last_status_change = changed_at
        return customer.model_copy()

    async def update_preferences(self, customer_id: int, updates: Dict[str, Any]) -> Customer:
        """Overwrite the given preference attributes"""
        customer = self._require(customer_id)
        for field, value in updates.items():
            if field not in PREFERENCE_FIELDS:
                raise ValueError(f"Not a preference field: {field}")
            setattr(customer, field, value)
        return customer.model_copy()

    def _require(self, customer_id: int) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer


__all__ = ["CustomerRepository", "SEED_CUSTOMERS", "PREFERENCE_FIELDS"]
