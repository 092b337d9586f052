"""
Loyalty Service Factory

Factory for creating LoyaltyService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .customer_repository import CustomerRepository
from .loyalty_service import LoyaltyService

logger = logging.getLogger(__name__)


def create_loyalty_service(
    seed: Optional[Iterable[Dict[str, Any]]] = None,
) -> LoyaltyService:
    """
    Create LoyaltyService with all real dependencies

    Args:
        seed: Optional initial customer rows (defaults to the built-in seed set)

    Returns:
        LoyaltyService; call initialize() before serving requests
    """
    repository = CustomerRepository(seed=seed)

    logger.info("LoyaltyService created with real dependencies")

    return LoyaltyService(repository=repository)


__all__ = ["create_loyalty_service"]
