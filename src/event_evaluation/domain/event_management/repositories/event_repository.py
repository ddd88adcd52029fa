"""Event repository interface for Event Management domain."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..entities.evaluator_assignment import EvaluatorAssignment
from ..entities.event import Event
from ..value_objects.event_mode import EventMode


@dataclass(frozen=True)
class EventFilters:
    """Optional filters for listing a group's events."""

    is_active: Optional[bool] = None
    mode: Optional[EventMode] = None
    team_id: Optional[int] = None
    starts_after: Optional[datetime] = None
    ends_before: Optional[datetime] = None


class EventRepository(ABC):
    """Repository interface for Event aggregate."""

    @abstractmethod
    async def add(self, event: Event) -> None:
        """Insert a new event with its relationships and assign its id."""
        pass

    @abstractmethod
    async def find_by_id(self, event_id: int) -> Optional[Event]:
        """Find event by ID with subjects, criteria and assignments."""
        pass

    @abstractmethod
    async def find_by_group(
        self, group_id: int, filters: Optional[EventFilters] = None
    ) -> List[Event]:
        """Find a group's events, newest start first."""
        pass

    @abstractmethod
    async def save(self, event: Event, expected_version: Optional[int] = None) -> None:
        """Persist scalar fields and reconcile relationship rows of an existing event.

        Bumps the event version; raises StaleWrite when ``expected_version`` is
        given and no longer matches the stored version.
        """
        pass

    @abstractmethod
    async def save_assignment(self, event_id: int, assignment: EvaluatorAssignment) -> None:
        """Persist status and timestamps of one assignment."""
        pass

    @abstractmethod
    async def delete(self, event_id: int) -> None:
        """Delete event and everything it owns."""
        pass
