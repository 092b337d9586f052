"""
Loyalty Service Business Logic

Core business logic for purchases, points accrual, status promotion
and customer preferences.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from .protocols import (
    CustomerRepositoryProtocol,
    CustomerNotFoundError,
    LoyaltyServiceError,
)
from .models import (
    Customer,
    CustomerStatus,
    PreferencesUpdateRequest,
)

logger = logging.getLogger(__name__)


# One point per this many currency units spent
CURRENCY_UNITS_PER_POINT = 10

# Minimum points for each promoted status, highest first
STATUS_THRESHOLDS = [
    (750, CustomerStatus.GOLD),
    (500, CustomerStatus.SILVER),
]

STATUS_ORDER = [
    CustomerStatus.BRONZE,
    CustomerStatus.SILVER,
    CustomerStatus.GOLD,
]


class InvalidPurchaseError(LoyaltyServiceError):
    """Raised when a purchase amount cannot be accepted"""
    pass


# ====================
# Pure rules
# ====================


def calculate_earned_points(amount: float) -> int:
    """Points earned for a purchase: floor(amount / 10)"""
    return math.floor(amount / CURRENCY_UNITS_PER_POINT)


def qualifying_status(points: int) -> Optional[CustomerStatus]:
    """Highest status the points total qualifies for, None below the lowest threshold"""
    for threshold, status in STATUS_THRESHOLDS:
        if points >= threshold:
            return status
    return None


def next_status(current_status: CustomerStatus, points: int) -> CustomerStatus:
    """
    Status after applying the promotion rule.

    Upward only: a customer is never moved below current_status,
    and BRONZE is never assigned by the rule.
    """
    qualified = qualifying_status(points)
    if qualified is None:
        return current_status
    if STATUS_ORDER.index(qualified) > STATUS_ORDER.index(current_status):
        return qualified
    return current_status


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-03-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LoyaltyService:
    """Loyalty service core business logic"""

    def __init__(
        self,
        repository: CustomerRepositoryProtocol,
        clock: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize loyalty service with injected dependencies

        Args:
            repository: Repository for customer data
            clock: Returns the current timestamp string (defaults to UTC now)
        """
        self.repository = repository
        self.clock = clock or utc_timestamp

        logger.info("LoyaltyService initialized with dependency injection")

    async def initialize(self):
        """Initialize service (seed the repository)"""
        await self.repository.initialize()
        logger.info("LoyaltyService initialized")

    async def close(self):
        await self.repository.close()

    # ====================
    # Customers
    # ====================

    async def get_customer(self, customer_id: int) -> Customer:
        """Get customer by ID"""
        customer = await self.repository.get_customer(customer_id)
        if customer is None:
            logger.warning(f"Customer not found: {customer_id}")
            raise CustomerNotFoundError(customer_id)
        return customer

    # ====================
    # Purchases
    # ====================

    async def record_purchase(
        self,
        customer_id: int,
        amount: float,
        store_location: Optional[str] = None
    ) -> Customer:
        """
        Record a purchase for a customer

        Accrues floor(amount / 10) points, stamps the purchase date and
        applies the promotion rule. Whenever the new total reaches a
        promotion threshold the status change timestamp is refreshed, even
        if the status itself stays the same.

        Args:
            customer_id: Customer ID
            amount: Purchase value in currency units
            store_location: Store where the purchase happened (not stored)

        Returns:
            Updated customer

        Raises:
            CustomerNotFoundError: If customer not found
            InvalidPurchaseError: If amount is negative or not finite
        """
        async with self.repository.lock(customer_id):
            customer = await self.get_customer(customer_id)

            if not math.isfinite(amount):
                raise InvalidPurchaseError("Purchase amount must be a finite number")
            if amount < 0:
                raise InvalidPurchaseError("Purchase amount must not be negative")

            earned_points = calculate_earned_points(amount)
            now = self.clock()

            updated = await self.repository.add_points(
                customer_id=customer_id,
                points=earned_points,
                purchased_at=now
            )
            logger.info(
                f"Customer {customer_id} earned {earned_points} points "
                f"(amount={amount}, store={store_location}), total={updated.points}"
            )

            if qualifying_status(updated.points) is not None:
                new_status = next_status(customer.status, updated.points)
                if new_status != customer.status:
                    logger.info(
                        f"Customer {customer_id} promoted: "
                        f"{customer.status.value} -> {new_status.value}"
                    )
                updated = await self.repository.update_status(
                    customer_id=customer_id,
                    status=new_status,
                    changed_at=now
                )

            return updated

    # ====================
    # Preferences
    # ====================

    async def update_preferences(
        self,
        customer_id: int,
        preferences: PreferencesUpdateRequest
    ) -> Customer:
        """
        Update customer preferences

        Only the fields present (and correctly typed) in the request are
        applied. An empty update returns the customer unchanged.

        Raises:
            CustomerNotFoundError: If customer not found
        """
        async with self.repository.lock(customer_id):
            customer = await self.get_customer(customer_id)

            updates = preferences.to_updates()
            if not updates:
                return customer

            updated = await self.repository.update_preferences(customer_id, updates)
            logger.info(f"Customer {customer_id} preferences updated: {sorted(updates)}")
            return updated


__all__ = [
    "LoyaltyService",
    "InvalidPurchaseError",
    "calculate_earned_points",
    "qualifying_status",
    "next_status",
    "utc_timestamp",
    "CURRENCY_UNITS_PER_POINT",
    "STATUS_THRESHOLDS",
    "STATUS_ORDER",
]
