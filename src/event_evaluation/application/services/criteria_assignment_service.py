"""Criteria assignment management: skill/metric set reconciliation."""

import logging
from typing import Iterable, Optional

from ...domain.event_management.entities.event import Event
from ...domain.event_management.exceptions import EventEvaluationDomainException
from ...domain.event_management.value_objects.sync_result import SyncResult
from ..interfaces.unit_of_work import UnitOfWork
from .event_loader import load_event
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class CriteriaAssignmentService:
    """Replace an event's skills or metrics, whichever its mode scores."""

    def __init__(self, uow: UnitOfWork, resolver: ReferenceResolver):
        self.uow = uow
        self.resolver = resolver

    async def sync_criteria(
        self, event_id: int, desired_ids: Iterable[int], expected_version: Optional[int] = None
    ) -> SyncResult:
        """Replace the criteria association; an empty list clears it."""
        desired_ids = list(desired_ids)
        try:
            logger.info(f"Syncing criteria for event {event_id}: {desired_ids}")

            async with self.uow:
                event = await load_event(self.uow, event_id)
                event.check_version(expected_version)
                result = await self.apply_sync(event, desired_ids)

                if result.has_changes:
                    await self.uow.events.save(event, expected_version)
                await self.uow.commit()

            logger.info(
                f"Criteria synced for event {event_id}: added={result.added} "
                f"removed={result.removed} kept={result.kept}"
            )
            return result

        except EventEvaluationDomainException as e:
            logger.warning(f"Criteria sync rejected for event {event_id}: {e}")
            raise

    async def apply_sync(self, event: Event, desired_ids: Iterable[int]) -> SyncResult:
        """Validate every desired id against the event's group catalog, then replace."""
        event.guard_unlocked(["criteria_ids"])
        desired_ids = list(desired_ids)
        await self.resolver.require_criteria(event.group_id, event.mode, desired_ids)
        return event.replace_criteria(desired_ids)
