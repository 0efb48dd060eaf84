"""Logging configuration schema."""
from pydantic import BaseModel, Field, field_validator

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_DESTINATIONS = ["stdout", "file", "both"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    destination: str = Field("stdout", description="Where to write logs (stdout, file, both)")
    file_path: str = Field("logs/garden_management.log", description="Log file path")
    max_size_mb: int = Field(10, description="Rotate the log file after this size")
    backup_count: int = Field(5, description="Number of rotated files to keep")
    json_format: bool = Field(False, description="Render log lines as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LEVELS}")
        return level

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        destination = v.lower()
        if destination not in VALID_DESTINATIONS:
            raise ValueError(f"Log destination must be one of {VALID_DESTINATIONS}")
        return destination

    @field_validator("max_size_mb", "backup_count")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Log rotation settings must not be negative")
        return v
