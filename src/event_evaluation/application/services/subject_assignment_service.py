"""Subject membership of events."""

import logging
from typing import Iterable, List

from ...domain.event_management.entities.event import Event
from ...domain.event_management.value_objects.sync_result import SyncResult
from ..interfaces.unit_of_work import UnitOfWork
from .event_loader import load_event
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class SubjectAssignmentService:
    """Add, remove or replace the subjects evaluated by an event."""

    def __init__(self, uow: UnitOfWork, resolver: ReferenceResolver):
        self.uow = uow
        self.resolver = resolver

    async def add_subjects(self, event_id: int, subject_ids: Iterable[int]) -> Event:
        """Add group roster members to an event; ids already present are ignored."""
        subject_ids = list(subject_ids)
        async with self.uow:
            event = await load_event(self.uow, event_id)
            event.guard_unlocked(["subject_ids"])
            await self.resolver.require_subjects(event.group_id, subject_ids)

            added = event.add_subjects(subject_ids)
            if added:
                await self.uow.events.save(event)
            await self.uow.commit()

        logger.info(f"Added subjects {added} to event {event_id}")
        return event

    async def remove_subjects(self, event_id: int, subject_ids: Iterable[int]) -> Event:
        """Remove subjects from an event; unknown ids are ignored."""
        async with self.uow:
            event = await load_event(self.uow, event_id)
            removed = event.remove_subjects(subject_ids)
            if removed:
                await self.uow.events.save(event)
            await self.uow.commit()

        logger.info(f"Removed subjects {removed} from event {event_id}")
        return event

    async def apply_replace(self, event: Event, subject_ids: List[int]) -> SyncResult:
        """Validate and replace the subject set of a loaded event without persisting it."""
        event.guard_unlocked(["subject_ids"])
        await self.resolver.require_subjects(event.group_id, subject_ids)
        return event.replace_subjects(subject_ids)
