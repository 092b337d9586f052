"""
Service Logger

Console (and optional file) logging for microservices, driven by LoggingConfig.
"""

import logging
import sys
from typing import List, Optional

from .config import LoggingConfig


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    formatter = logging.Formatter(config.log_format)
    handlers: List[logging.Handler] = []

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service

    Both the service logger and the service package logger
    (``microservices.<service_name>``, parent of the module loggers) get
    the level and handlers. Calling it again for the same service returns
    the already configured logger without adding duplicate handlers.

    Args:
        service_name: Logger name, usually the service package name
        level: Log level override (falls back to LOG_LEVEL)
        config: Logging config (loaded from the environment if not provided)

    Returns:
        Configured logger
    """
    if config is None:
        config = LoggingConfig.from_env()

    log_level = (level or config.log_level).upper()
    logger = logging.getLogger(service_name)
    package_logger = logging.getLogger(f"microservices.{service_name}")

    handlers = None
    for target in (logger, package_logger):
        target.setLevel(log_level)
        if target.handlers:
            continue
        if handlers is None:
            handlers = _build_handlers(config)
        for handler in handlers:
            target.addHandler(handler)
        target.propagate = False

    return logger


__all__ = ["setup_service_logger"]
