"""Event lifecycle use cases."""

from .create_event import CreateEventUseCase
from .delete_event import DeleteEventUseCase
from .query_events import GetEventUseCase, ListGroupEventsUseCase
from .set_event_lock import SetEventLockUseCase
from .update_event import UpdateEventUseCase

__all__ = [
    "CreateEventUseCase",
    "DeleteEventUseCase",
    "GetEventUseCase",
    "ListGroupEventsUseCase",
    "SetEventLockUseCase",
    "UpdateEventUseCase",
]
