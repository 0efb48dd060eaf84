"""Configuration package with clean public API."""

from .loader import ConfigurationLoader
from .manager import ConfigurationManager, get_config_manager, reset_config_manager
from .schemas import (
    AppConfig,
    LoggingConfig,
    MessagingConfig,
    SqsTransportConfig,
    validate_config,
)

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Specific configurations
    "LoggingConfig",
    "MessagingConfig",
    "SqsTransportConfig",
    # Configuration management
    "ConfigurationManager",
    "ConfigurationLoader",
    "get_config_manager",
    "reset_config_manager",
]
