#!/usr/bin/env python3
"""
Core Module for Microservices Architecture

Shared components for the microservices in this repository.

COMPONENTS:
    - config/: Dataclass-based configuration loaded from the environment
    - config_manager.py: Per-service configuration entry point
    - logger.py: Service logger setup

USAGE:
    from core.config_manager import ConfigManager
    from core.logger import setup_service_logger

    config = ConfigManager("loyalty_service").get_service_config()
    logger = setup_service_logger("loyalty_service", level=config.log_level)
"""

from .config_manager import ConfigManager
from .logger import setup_service_logger

__all__ = [
    "ConfigManager",
    "setup_service_logger",
]

__version__ = "2.0.0"
