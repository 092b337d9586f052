#!/usr/bin/env python3
"""Per-service runtime configuration

Host, port and runtime flags for a single microservice process.
Each value is looked up first with the service prefix
(e.g. LOYALTY_SERVICE_PORT) and then without it (SERVICE_PORT).
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _lookup(prefix: str, key: str, default: str) -> str:
    value: Optional[str] = os.getenv(f"{prefix}{key}") if prefix else None
    if value is None:
        value = os.getenv(key, default)
    return value


@dataclass
class ServiceConfig:
    """Runtime settings of one service"""

    service_name: str = "loyalty_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8260

    # ===========================================
    # Runtime flags
    # ===========================================
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"

    @classmethod
    def from_env(cls, service_name: str, default_port: int = 8260) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        prefix = f"{service_name.upper()}_"
        return cls(
            service_name=service_name,
            service_host=_lookup(prefix, "SERVICE_HOST", "0.0.0.0"),
            service_port=_int(_lookup(prefix, "SERVICE_PORT", ""), default_port),
            debug=_bool(_lookup(prefix, "DEBUG", "false")),
            log_level=_lookup(prefix, "LOG_LEVEL", "INFO"),
            environment=os.getenv("ENV") or os.getenv("ENVIRONMENT", "development"),
        )
