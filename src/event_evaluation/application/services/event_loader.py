"""Loading of event aggregates inside an open unit of work."""

from typing import Optional

from ...domain.event_management.entities.event import Event
from ...domain.event_management.exceptions import NotFound
from ..interfaces.unit_of_work import UnitOfWork


async def load_event(uow: UnitOfWork, event_id: int, group_id: Optional[int] = None) -> Event:
    """Load an event, optionally requiring it to belong to ``group_id``."""
    event = await uow.events.find_by_id(event_id)
    if event is None or (group_id is not None and event.group_id != group_id):
        raise NotFound("Event", [event_id])
    return event
