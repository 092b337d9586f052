"""
Loyalty Service Protocols

Defines interfaces for dependency injection and testing.
NO import-time I/O dependencies - safe to import anywhere.
"""

from typing import Any, AsyncContextManager, Dict, Optional, Protocol, runtime_checkable

from .models import Customer, CustomerStatus


# ====================
# Repository Protocol
# ====================


@runtime_checkable
class CustomerRepositoryProtocol(Protocol):
    """Protocol for customer data repository"""

    async def initialize(self) -> None:
        """Load the initial customer set"""
        ...

    async def close(self) -> None:
        """Release repository resources"""
        ...

    def is_ready(self) -> bool:
        """Whether the repository has been initialized"""
        ...

    def lock(self, customer_id: int) -> AsyncContextManager[None]:
        """Serialize read-modify-write cycles on one customer"""
        ...

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get a copy of the customer, or None"""
        ...

    async def count_customers(self) -> int:
        """Number of customers held"""
        ...

    async def add_points(
        self,
        customer_id: int,
        points: int,
        purchased_at: str
    ) -> Customer:
        """Add points and stamp the last purchase date"""
        ...

    async def update_status(
        self,
        customer_id: int,
        status: CustomerStatus,
        changed_at: str
    ) -> Customer:
        """Set status and stamp the last status change"""
        ...

    async def update_preferences(
        self,
        customer_id: int,
        updates: Dict[str, Any]
    ) -> Customer:
        """Overwrite preference attributes"""
        ...


# ====================
# Custom Exceptions
# ====================


class LoyaltyServiceError(Exception):
    """Base exception for loyalty service errors"""
    pass


class CustomerNotFoundError(LoyaltyServiceError):
    """Raised when a customer id does not resolve"""

    def __init__(self, customer_id: Optional[int] = None):
        super().__init__("Customer not found")
        self.customer_id = customer_id


__all__ = [
    "CustomerRepositoryProtocol",
    "LoyaltyServiceError",
    "CustomerNotFoundError",
]
