"""
Config Manager

Central entry point a microservice uses to read its configuration.

USAGE:
    from core.config_manager import ConfigManager

    config_manager = ConfigManager("loyalty_service")
    config = config_manager.get_service_config()
    print(config.service_port)
"""

import logging
from dataclasses import asdict
from typing import Optional

from .config import LoggingConfig, ServiceConfig

logger = logging.getLogger(__name__)

_SECRET_MARKERS = ("password", "secret", "token", "key")


class ConfigManager:
    """Resolves service and logging configuration for one service"""

    def __init__(self, service_name: str, default_port: int = 8260):
        self.service_name = service_name
        self.default_port = default_port
        self._service_config: Optional[ServiceConfig] = None
        self._logging_config: Optional[LoggingConfig] = None

    def get_service_config(self) -> ServiceConfig:
        """Get (and cache) the service runtime configuration"""
        if self._service_config is None:
            self._service_config = ServiceConfig.from_env(
                self.service_name, default_port=self.default_port
            )
        return self._service_config

    def get_logging_config(self) -> LoggingConfig:
        """Get (and cache) the logging configuration"""
        if self._logging_config is None:
            self._logging_config = LoggingConfig.from_env()
        return self._logging_config

    def reload(self) -> ServiceConfig:
        """Drop cached values and re-read the environment"""
        self._service_config = None
        self._logging_config = None
        return self.get_service_config()

    def print_config_summary(self, show_secrets: bool = False) -> None:
        """Log the resolved configuration"""
        config = asdict(self.get_service_config())
        logger.info(f"Configuration for {self.service_name}:")
        for key, value in config.items():
            if not show_secrets and any(marker in key.lower() for marker in _SECRET_MARKERS):
                value = "****"
            logger.info(f"  {key}: {value}")


__all__ = ["ConfigManager"]
