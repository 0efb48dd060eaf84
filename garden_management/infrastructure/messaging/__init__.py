"""Messaging infrastructure - integration contracts, translation, publishing."""

from .publisher import GardenIntegrationEventPublisher
from .transports import (
    InMemoryMessageTransport,
    LoggingMessageTransport,
    MessageTransport,
    SqsMessageTransport,
    create_message_transport,
)
from .translation import MessageContext, translate_event

__all__ = [
    "GardenIntegrationEventPublisher",
    "MessageContext",
    "translate_event",
    "MessageTransport",
    "InMemoryMessageTransport",
    "LoggingMessageTransport",
    "SqsMessageTransport",
    "create_message_transport",
]
