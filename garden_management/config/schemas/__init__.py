"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LoggingConfig
from .messaging_schema import MessagingConfig, SqsTransportConfig

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Logging configuration
    "LoggingConfig",
    # Messaging configurations
    "MessagingConfig",
    "SqsTransportConfig",
]
