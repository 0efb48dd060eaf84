import asyncio
import json
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from garden_management.config import MessagingConfig, SqsTransportConfig
from garden_management.domain.garden import GardenCreatedEvent, GardenDeletedEvent
from garden_management.infrastructure.exceptions import ConfigurationError, MessageTransportError
from garden_management.infrastructure.messaging import (
    InMemoryMessageTransport,
    LoggingMessageTransport,
    SqsMessageTransport,
    create_message_transport,
    translate_event,
)


@pytest.fixture
def sqs_queue(aws_credentials):
    """Create a mocked SQS queue and yield its client and URL."""
    with mock_aws():
        sqs = boto3.client("sqs", region_name="us-east-1")
        queue_url = sqs.create_queue(QueueName="garden-events")["QueueUrl"]
        yield sqs, queue_url


def test_sqs_transport_sends_wire_body_with_type_attribute(sqs_queue, garden, now):
    # Arrange
    sqs, queue_url = sqs_queue
    transport = SqsMessageTransport(SqsTransportConfig(queue_url=queue_url, region="us-east-1"))
    message = translate_event(GardenCreatedEvent(garden=garden, occurred_at=now))

    # Act
    asyncio.run(transport.publish(message))

    # Assert
    received = sqs.receive_message(
        QueueUrl=queue_url, MessageAttributeNames=["All"], MaxNumberOfMessages=10,
    )["Messages"]
    assert len(received) == 1
    body = json.loads(received[0]["Body"])
    assert body["gardenId"] == str(garden.id)
    assert body["name"] == "Backyard"
    assert received[0]["MessageAttributes"]["message_type"]["StringValue"] == "GardenCreated"


def test_sqs_transport_wraps_client_errors(garden, now):
    client = Mock()
    client.send_message.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "SendMessage",
    )
    transport = SqsMessageTransport(
        SqsTransportConfig(queue_url="https://sqs.us-east-1.amazonaws.com/123/q"), client=client,
    )
    message = translate_event(GardenDeletedEvent(garden=garden, occurred_at=now))

    with pytest.raises(MessageTransportError) as exc_info:
        asyncio.run(transport.publish(message))

    assert "GardenDeleted" in exc_info.value.message
    assert exc_info.value.details["queue_url"].endswith("/q")


def test_sqs_transport_requires_queue_url():
    with pytest.raises(ConfigurationError):
        SqsMessageTransport(SqsTransportConfig())


def test_in_memory_transport_keeps_messages(garden, now):
    transport = InMemoryMessageTransport()
    message = translate_event(GardenDeletedEvent(garden=garden, occurred_at=now))

    asyncio.run(transport.publish(message))

    assert transport.published == [message]
    transport.clear()
    assert transport.published == []


def test_logging_transport_accepts_messages(garden, now):
    message = translate_event(GardenDeletedEvent(garden=garden, occurred_at=now))

    asyncio.run(LoggingMessageTransport().publish(message))


@pytest.mark.parametrize("transport, expected", [
    ("memory", InMemoryMessageTransport),
    ("logging", LoggingMessageTransport),
    ("LOGGING", LoggingMessageTransport),
])
def test_transport_factory_selects_by_name(transport, expected):
    assert isinstance(create_message_transport(MessagingConfig(transport=transport)), expected)


def test_transport_factory_builds_sqs_transport(sqs_queue):
    _, queue_url = sqs_queue
    config = MessagingConfig(transport="sqs", sqs=SqsTransportConfig(queue_url=queue_url))

    transport = create_message_transport(config)

    assert isinstance(transport, SqsMessageTransport)
    assert transport.queue_url == queue_url


def test_transport_factory_defaults_to_logging():
    assert isinstance(create_message_transport(), LoggingMessageTransport)
