"""Fire-and-forget publication of aggregate domain events."""

import logging

from ...domain.event_management.entities.event import Event
from ..interfaces.domain_event_publisher import DomainEventPublisher

logger = logging.getLogger(__name__)


async def publish_pending_events(publisher: DomainEventPublisher, event: Event) -> None:
    """Publish and clear an event's pending domain events after commit.

    Delivery failures are logged and never undo the committed write.
    """
    domain_events = event.get_domain_events()
    event.clear_domain_events()
    if not domain_events:
        return

    try:
        await publisher.publish_all(domain_events)
    except Exception as e:
        logger.warning(
            f"Failed to publish {len(domain_events)} domain events for event {event.id}: {e}",
            exc_info=True,
        )
