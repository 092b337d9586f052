"""
Loyalty Service Data Models

Pydantic models for customers, purchases and preferences.
Wire format uses camelCase field names; unset optional fields are omitted.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ====================
# Enum Types
# ====================

class CustomerStatus(str, Enum):
    """Customer loyalty status, lowest to highest"""
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"


# ====================
# Core Data Models
# ====================

class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Customer(CamelModel):
    """Customer entity model"""
    id: int = Field(..., description="Unique customer ID")
    name: str

    # Loyalty
    status: CustomerStatus = CustomerStatus.BRONZE
    points: int = Field(default=0, ge=0)

    # Dates (ISO-8601 strings)
    last_purchase_date: str
    join_date: str
    last_status_change: Optional[str] = None

    # Preferences
    email: Optional[str] = None
    preferred_store: Optional[str] = None
    notifications: bool = True


# ====================
# Request Models
# ====================

class PurchaseRequest(CamelModel):
    """Record purchase request"""
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Purchase value in currency units")
    store_location: Optional[str] = None

    @field_validator("store_location", mode="before")
    @classmethod
    def drop_non_str(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


class PreferencesUpdateRequest(CamelModel):
    """
    Preferences update request

    Every field is optional. A value of the wrong type is dropped
    (treated as absent) instead of failing the request.
    """
    notifications: Optional[bool] = None
    preferred_store: Optional[str] = None
    email: Optional[str] = None

    @field_validator("notifications", mode="before")
    @classmethod
    def drop_non_bool(cls, v: Any) -> Optional[bool]:
        return v if isinstance(v, bool) else None

    @field_validator("preferred_store", "email", mode="before")
    @classmethod
    def drop_non_str(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @classmethod
    def from_body(cls, body: Any) -> "PreferencesUpdateRequest":
        """Build from a raw JSON body; anything but an object is an empty update"""
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)

    def to_updates(self) -> Dict[str, Any]:
        """Fields to apply, keyed by Customer attribute name"""
        return self.model_dump(exclude_none=True)


# ====================
# System Models
# ====================

class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    port: int
    version: str
    dependencies: Dict[str, str]


class ServiceInfo(BaseModel):
    """Service information"""
    service: str
    version: str
    description: str
    capabilities: List[str]


__all__ = [
    # Enums
    "CustomerStatus",
    # Core Models
    "CamelModel",
    "Customer",
    # Request Models
    "PurchaseRequest",
    "PreferencesUpdateRequest",
    # System Models
    "HealthResponse",
    "ServiceInfo",
]
