"""Messaging configuration schema - how integration messages leave the process."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

VALID_TRANSPORTS = ["logging", "memory", "sqs"]


class SqsTransportConfig(BaseModel):
    """Amazon SQS transport configuration."""
    model_config = ConfigDict(extra="forbid")

    queue_url: Optional[str] = Field(None, description="Target queue URL")
    region: str = Field("us-east-1", description="AWS region")
    endpoint_url: Optional[str] = Field(None, description="Custom endpoint (e.g. LocalStack)")
    retry_attempts: int = Field(3, description="botocore retry attempts")
    connect_timeout_ms: int = Field(1000, description="Connection timeout in milliseconds")

    @field_validator("retry_attempts", "connect_timeout_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("SQS transport settings must not be negative")
        return v


class MessagingConfig(BaseModel):
    """Integration message transport configuration."""

    transport: str = Field("logging", description="Transport (logging, memory, sqs)")
    sqs: SqsTransportConfig = Field(default_factory=SqsTransportConfig)

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        transport = v.lower()
        if transport not in VALID_TRANSPORTS:
            raise ValueError(f"Transport must be one of {VALID_TRANSPORTS}")
        return transport

    @model_validator(mode="after")
    def ensure_queue_url(self) -> "MessagingConfig":
        if self.transport == "sqs" and not self.sqs.queue_url:
            raise ValueError("messaging.sqs.queue_url is required for the sqs transport")
        return self
