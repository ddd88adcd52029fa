"""Read-side use cases for evaluation events."""

from typing import List, Optional

from ....domain.event_management.entities.event import Event
from ....domain.event_management.repositories.event_repository import EventFilters
from ...interfaces.unit_of_work import UnitOfWork
from ...services.event_loader import load_event
from ...services.reference_resolver import ReferenceResolver


class GetEventUseCase:
    """Fetch one event with subjects, criteria and assignments."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_id: int) -> Event:
        async with self.uow:
            return await load_event(self.uow, event_id)


class ListGroupEventsUseCase:
    """List a group's events, newest start first."""

    def __init__(self, uow: UnitOfWork, resolver: ReferenceResolver):
        self.uow = uow
        self.resolver = resolver

    async def execute(self, group_id: int, filters: Optional[EventFilters] = None) -> List[Event]:
        await self.resolver.require_group(group_id)
        async with self.uow:
            return await self.uow.events.find_by_group(group_id, filters)
