"""Domain event publisher that writes events to the log."""

import logging
from typing import List

from ...application.interfaces.domain_event_publisher import DomainEventPublisher
from ...domain.event_management.events.event_events import DomainEvent

logger = logging.getLogger(__name__)


class LoggingDomainEventPublisher(DomainEventPublisher):
    """Publish domain events as structured log records.

    Stands in wherever no message bus is wired; invitation emails and similar
    side effects hang off these records.
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level

    async def publish(self, event: DomainEvent) -> None:
        logger.log(self.level, f"Domain event {event.event_type}: {event.to_dict()}")

    async def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)
