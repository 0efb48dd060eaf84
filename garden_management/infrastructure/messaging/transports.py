"""Message transports - hand integration messages off for asynchronous delivery."""
import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from garden_management.config.schemas.messaging_schema import MessagingConfig, SqsTransportConfig
from garden_management.infrastructure.exceptions import ConfigurationError, MessageTransportError
from garden_management.infrastructure.logging.logger import get_logger

from .contracts import IntegrationMessage

logger = get_logger(__name__)


class MessageTransport(ABC):
    """Port for publishing one integration message.

    Delivery guarantees beyond the hand-off are the transport's own business.
    """

    @abstractmethod
    async def publish(self, message: IntegrationMessage) -> None:
        """Hand ``message`` off for delivery, raising on failure."""


class InMemoryMessageTransport(MessageTransport):
    """Keeps published messages in a list (testing and local runs)."""

    def __init__(self):
        self.published: List[IntegrationMessage] = []

    async def publish(self, message: IntegrationMessage) -> None:
        self.published.append(message)

    def clear(self) -> None:
        self.published.clear()


class LoggingMessageTransport(MessageTransport):
    """Writes each message to the log as an audit trail instead of delivering it."""

    async def publish(self, message: IntegrationMessage) -> None:
        logger.info(
            "Integration message published",
            message_type=message.message_type,
            garden_id=str(message.garden_id),
            body=message.to_wire(),
        )


class SqsMessageTransport(MessageTransport):
    """
    Sends integration messages to an Amazon SQS queue.

    The message body is the camelCase JSON wire form; the message type travels
    as a ``message_type`` message attribute so consumers can route without
    parsing the body.
    """

    def __init__(self, config: SqsTransportConfig, client=None):
        """
        Args:
            config: SQS transport configuration (queue URL is required)
            client: Optional pre-built boto3 SQS client

        Raises:
            ConfigurationError: If no queue URL is configured
        """
        if not config.queue_url:
            raise ConfigurationError("SQS transport requires a queue URL")
        self.queue_url = config.queue_url
        self._client = client or boto3.client(
            "sqs",
            region_name=config.region,
            endpoint_url=config.endpoint_url,
            config=Config(
                retries={"max_attempts": config.retry_attempts, "mode": "standard"},
                connect_timeout=config.connect_timeout_ms / 1000,
            ),
        )

    async def publish(self, message: IntegrationMessage) -> None:
        await asyncio.to_thread(self._send, message)

    def _send(self, message: IntegrationMessage) -> None:
        try:
            response = self._client.send_message(
                QueueUrl=self.queue_url,
                MessageBody=message.to_wire(),
                MessageAttributes={
                    "message_type": {
                        "DataType": "String",
                        "StringValue": message.message_type,
                    }
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to send integration message",
                message_type=message.message_type,
                queue_url=self.queue_url,
                error=str(e),
            )
            raise MessageTransportError(
                f"Failed to send {message.message_type} to SQS: {e}",
                details={"queue_url": self.queue_url},
            ) from e

        logger.debug(
            "Integration message sent",
            message_type=message.message_type,
            message_id=response.get("MessageId"),
        )


def create_message_transport(config: Optional[MessagingConfig] = None) -> MessageTransport:
    """Create the transport selected by ``messaging.transport``."""
    config = config or MessagingConfig()
    if config.transport == "memory":
        return InMemoryMessageTransport()
    if config.transport == "logging":
        return LoggingMessageTransport()
    if config.transport == "sqs":
        return SqsMessageTransport(config.sqs)
    raise ConfigurationError(f"Unknown message transport: {config.transport}")
