"""
Loyalty Service Routes Registry

Defines service metadata and routes for API documentation.
"""

SERVICE_METADATA = {
    "service_name": "loyalty_service",
    "version": "1.0.0",
    "description": "Customer loyalty ledger with points accrual, status promotion and preferences",
    "tags": ["v1", "loyalty", "customers", "microservice"],
    "capabilities": [
        "customer_lookup",
        "purchase_recording",
        "points_accrual",
        "status_promotion",
        "customer_preferences",
    ],
}

# Route definitions for API documentation
ROUTES = [
    # Health endpoints
    {"path": "/health", "methods": ["GET"], "description": "Health check"},

    # Service info
    {"path": "/info", "methods": ["GET"], "description": "Service information"},

    # Customers
    {"path": "/api/customers/{customer_id}", "methods": ["GET"], "description": "Get customer"},
    {"path": "/api/customers/{customer_id}/purchase", "methods": ["POST"], "description": "Record purchase"},
    {"path": "/api/customers/{customer_id}/preferences", "methods": ["PATCH"], "description": "Update preferences"},
]


def get_route_summary():
    """Get route metadata summary"""
    route_paths = [r["path"] for r in ROUTES]
    return {
        "route_count": str(len(ROUTES)),
        "routes": ",".join(route_paths),
        "base_path": "/api/customers",
    }


__all__ = ["SERVICE_METADATA", "ROUTES", "get_route_summary"]
