"""
Loyalty Microservice API

Customer loyalty ledger with points accrual, status promotion and preferences.
"""

import re
from contextlib import asynccontextmanager
from typing import Any, Optional, Type, TypeVar

from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError

from core.config_manager import ConfigManager
from core.logger import setup_service_logger

from .factory import create_loyalty_service
from .loyalty_service import InvalidPurchaseError, LoyaltyService
from .models import (
    Customer,
    HealthResponse,
    PreferencesUpdateRequest,
    PurchaseRequest,
    ServiceInfo,
)
from .protocols import CustomerNotFoundError, LoyaltyServiceError
from .routes_registry import SERVICE_METADATA, get_route_summary

# Initialize config manager
config_manager = ConfigManager("loyalty_service")
config = config_manager.get_service_config()

# Configure logger
logger = setup_service_logger("loyalty_service", level=config.log_level.upper())

# Print config info (development)
if config.debug:
    config_manager.print_config_summary(show_secrets=False)

SERVICE_PORT = config.service_port
SERVICE_VERSION = SERVICE_METADATA["version"]
NOT_FOUND_MESSAGE = "Customer not found"

# Leading integer of a path segment, e.g. " 12abc" -> 12
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

RequestModelT = TypeVar("RequestModelT", bound=BaseModel)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    service: Optional[LoyaltyService] = None

    try:
        service = create_loyalty_service()
        await service.initialize()
        app.state.loyalty_service = service

        route_meta = get_route_summary()
        logger.info(
            f"Loyalty service started on port {SERVICE_PORT} "
            f"({route_meta['route_count']} routes)"
        )
        yield

    except Exception as e:
        logger.error(f"Failed to initialize loyalty service: {e}")
        raise
    finally:
        app.state.loyalty_service = None
        if service:
            await service.close()
            logger.info("Loyalty service customer store released")


# Create FastAPI app
app = FastAPI(
    title="Loyalty Service",
    description=SERVICE_METADATA["description"],
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# ====================
# Dependency Injection
# ====================


async def get_loyalty_service(request: Request) -> LoyaltyService:
    """Get loyalty service instance"""
    service = getattr(request.app.state, "loyalty_service", None)
    if not service:
        raise HTTPException(status_code=503, detail="Loyalty service not initialized")
    return service


def parse_customer_id(raw: str) -> int:
    """
    Parse a path customer id

    Uses the leading run of digits; anything without one cannot match
    a customer and is reported as not found.
    """
    match = _LEADING_INT.match(raw)
    if not match:
        raise CustomerNotFoundError()
    return int(match.group(1))


def validate_body(model: Type[RequestModelT], body: Any) -> RequestModelT:
    """Validate a raw JSON body, reporting failures as a standard 422"""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in e.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=body)


# ====================
# Health Check and Service Info
# ====================


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check"""
    dependencies = {}

    service = getattr(request.app.state, "loyalty_service", None)
    if service and service.repository.is_ready():
        dependencies["customer_store"] = "healthy"
    else:
        dependencies["customer_store"] = "unhealthy"

    return HealthResponse(
        status="healthy" if all(v == "healthy" for v in dependencies.values()) else "degraded",
        service=SERVICE_METADATA["service_name"],
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
        dependencies=dependencies,
    )


@app.get("/info", response_model=ServiceInfo)
async def get_service_info():
    """Get service information"""
    return ServiceInfo(
        service=SERVICE_METADATA["service_name"],
        version=SERVICE_VERSION,
        description=SERVICE_METADATA["description"],
        capabilities=SERVICE_METADATA["capabilities"],
    )


# ====================
# Customer API
# ====================


@app.get(
    "/api/customers/{customer_id}",
    response_model=Customer,
    response_model_exclude_none=True,
)
async def get_customer(
    customer_id: str,
    service: LoyaltyService = Depends(get_loyalty_service)
):
    """Get customer by ID"""
    try:
        return await service.get_customer(parse_customer_id(customer_id))

    except LoyaltyServiceError:
        raise
    except Exception as e:
        logger.error(f"Error getting customer: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post(
    "/api/customers/{customer_id}/purchase",
    response_model=Customer,
    response_model_exclude_none=True,
)
async def record_purchase(
    customer_id: str,
    body: Any = Body(default=None),
    service: LoyaltyService = Depends(get_loyalty_service)
):
    """
    Record a purchase and re-evaluate status

    The customer is resolved before the body is validated, so an unknown
    id is reported as not found whatever the body holds.
    """
    try:
        parsed_id = parse_customer_id(customer_id)
        await service.get_customer(parsed_id)

        request = validate_body(PurchaseRequest, body)
        return await service.record_purchase(
            customer_id=parsed_id,
            amount=request.amount,
            store_location=request.store_location
        )

    except (LoyaltyServiceError, RequestValidationError):
        raise
    except Exception as e:
        logger.error(f"Error recording purchase: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.patch(
    "/api/customers/{customer_id}/preferences",
    response_model=Customer,
    response_model_exclude_none=True,
)
async def update_preferences(
    customer_id: str,
    body: Any = Body(default=None),
    service: LoyaltyService = Depends(get_loyalty_service)
):
    """Update notifications, preferred store and email"""
    try:
        return await service.update_preferences(
            customer_id=parse_customer_id(customer_id),
            preferences=PreferencesUpdateRequest.from_body(body)
        )

    except LoyaltyServiceError:
        raise
    except Exception as e:
        logger.error(f"Error updating preferences: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


# ====================
# Error Handling
# ====================


@app.exception_handler(CustomerNotFoundError)
async def not_found_error_handler(request: Request, exc: CustomerNotFoundError):
    return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)


@app.exception_handler(InvalidPurchaseError)
async def invalid_purchase_error_handler(request: Request, exc: InvalidPurchaseError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(LoyaltyServiceError)
async def service_error_handler(request: Request, exc: LoyaltyServiceError):
    logger.error(f"Loyalty service error in {request.url}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception in {request.url}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error occurred"}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.loyalty_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )
