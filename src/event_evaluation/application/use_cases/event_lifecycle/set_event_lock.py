"""Use case for locking and unlocking evaluation events."""

import logging

from ....domain.event_management.entities.event import Event
from ...interfaces.domain_event_publisher import DomainEventPublisher
from ...interfaces.unit_of_work import UnitOfWork
from ...services.event_loader import load_event
from ...services.event_publication import publish_pending_events

logger = logging.getLogger(__name__)


class SetEventLockUseCase:
    """Toggle the lock flag; permitted whatever the event's current state."""

    def __init__(self, uow: UnitOfWork, event_publisher: DomainEventPublisher):
        self.uow = uow
        self.event_publisher = event_publisher

    async def execute(self, event_id: int, locked: bool) -> Event:
        async with self.uow:
            event = await load_event(self.uow, event_id)
            event.set_locked(locked)
            await self.uow.events.save(event)
            await self.uow.commit()

        await publish_pending_events(self.event_publisher, event)
        logger.info(f"Event {event_id} {'locked' if locked else 'unlocked'}")
        return event
