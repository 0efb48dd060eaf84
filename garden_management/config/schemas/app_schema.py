"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError, field_validator

from garden_management.infrastructure.exceptions import ConfigurationError

from .logging_schema import LoggingConfig
from .messaging_schema import MessagingConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    environment: str = Field("development", description="Environment")
    debug: bool = Field(False, description="Debug mode")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    messaging: MessagingConfig = Field(default_factory=MessagingConfig)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """
        Validate environment.

        Args:
            v: Value to validate

        Returns:
            Validated value

        Raises:
            ValueError: If environment is invalid
        """
        valid_environments = ["development", "testing", "staging", "production"]
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of {valid_environments}")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return validate_config(data)


def validate_config(data: Dict[str, Any]) -> AppConfig:
    """Validate raw configuration data, raising ``ConfigurationError`` on failure."""
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", details={"errors": e.errors()}) from e
