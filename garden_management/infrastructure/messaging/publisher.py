"""Garden integration event publisher."""
from typing import Any, Dict, Iterable, Optional

from garden_management.domain.base.entity import AggregateRoot
from garden_management.infrastructure.logging.logger import get_logger

from .transports import MessageTransport
from .translation import MessageContext, translate_event

logger = get_logger(__name__)


class GardenIntegrationEventPublisher:
    """
    Publishes the domain events of one unit of work as integration messages.

    Messages are handed to the transport one at a time, in event order, each
    awaited before the next is issued. Only once every message of the call has
    been handed off are the pending-event buffers of the aggregates involved
    cleared. A failure or cancellation part-way leaves every buffer as it was,
    so the whole publish step can be retried.
    """

    def __init__(self, transport: MessageTransport):
        self._transport = transport

    async def publish(self, events: Iterable[Any],
                      context: Optional[MessageContext] = None) -> None:
        events = list(events)
        aggregates: Dict[int, AggregateRoot] = {}

        for event in events:
            message = translate_event(event, context)
            if message is None:
                logger.debug("No integration message for event",
                             event_type=getattr(event, "event_type", type(event).__name__))
                continue

            await self._transport.publish(message)
            logger.debug("Published integration message",
                         message_type=message.message_type,
                         garden_id=str(message.garden_id))

            garden = event.garden
            aggregates.setdefault(id(garden), garden)

        for aggregate in aggregates.values():
            aggregate.clear_pending_events()

        if events:
            logger.info("Published garden integration events",
                        events=len(events), aggregates=len(aggregates))
