"""Evaluator assignment management: status edits, single invites and set reconciliation."""

import logging
from typing import Iterable, Optional

from ...domain.event_management.entities.evaluator_assignment import EvaluatorAssignment
from ...domain.event_management.entities.event import Event
from ...domain.event_management.exceptions import EventEvaluationDomainException, NotFound
from ...domain.event_management.value_objects.evaluator_status import EvaluatorStatus
from ...domain.event_management.value_objects.sync_result import SyncResult
from ..interfaces.domain_event_publisher import DomainEventPublisher
from ..interfaces.unit_of_work import UnitOfWork
from .event_loader import load_event
from .event_publication import publish_pending_events
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class EvaluatorAssignmentService:
    """Owns the evaluator state machine and evaluator-set reconciliation."""

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: ReferenceResolver,
        event_publisher: DomainEventPublisher,
    ):
        self.uow = uow
        self.resolver = resolver
        self.event_publisher = event_publisher

    async def sync_evaluators(
        self, event_id: int, desired_ids: Iterable[int], expected_version: Optional[int] = None
    ) -> SyncResult:
        """Make the event's evaluators exactly ``desired_ids``.

        Removed assignments are deleted outright, added ones start as Invited,
        kept ones are left untouched. Calling twice with the same set is a no-op
        the second time.
        """
        desired_ids = list(desired_ids)
        try:
            logger.info(f"Syncing evaluators for event {event_id}: {desired_ids}")

            async with self.uow:
                event = await load_event(self.uow, event_id)
                event.check_version(expected_version)
                result = await self.apply_sync(event, desired_ids)

                if result.has_changes:
                    await self.uow.events.save(event, expected_version)
                await self.uow.commit()

            await publish_pending_events(self.event_publisher, event)

            logger.info(
                f"Evaluators synced for event {event_id}: added={result.added} "
                f"removed={result.removed} kept={result.kept}"
            )
            return result

        except EventEvaluationDomainException as e:
            logger.warning(f"Evaluator sync rejected for event {event_id}: {e}")
            raise

    async def apply_sync(self, event: Event, desired_ids: Iterable[int]) -> SyncResult:
        """Validate and apply an evaluator delta to a loaded event without persisting it."""
        event.guard_unlocked(["evaluator_ids"])
        desired_ids = list(desired_ids)

        preview = SyncResult.compute(event.evaluator_ids, desired_ids)
        await self.resolver.require_identities(preview.added)

        result = event.sync_assignments(desired_ids)
        added = set(result.added)
        event.record_invitations(a for a in event.assignments if a.evaluator_id in added)
        return result

    async def invite_evaluator(self, event_id: int, evaluator_id: int) -> EvaluatorAssignment:
        """Invite one evaluator; an existing assignment is returned unchanged."""
        try:
            async with self.uow:
                event = await load_event(self.uow, event_id)
                event.guard_unlocked(["evaluator_ids"])

                existing = event.find_assignment(evaluator_id)
                if existing is not None:
                    logger.debug(f"Evaluator {evaluator_id} already assigned to event {event_id}")
                    return existing

                await self.resolver.require_identities([evaluator_id])
                assignment = event.add_assignment(evaluator_id)
                event.record_invitations([assignment])

                await self.uow.events.save(event)
                await self.uow.commit()

            await publish_pending_events(self.event_publisher, event)
            logger.info(f"Evaluator {evaluator_id} invited to event {event_id}")
            return assignment

        except EventEvaluationDomainException as e:
            logger.warning(f"Invitation of evaluator {evaluator_id} to event {event_id} failed: {e}")
            raise

    async def update_status(
        self, event_id: int, evaluator_id: int, status: EvaluatorStatus
    ) -> EvaluatorAssignment:
        """Write an assignment status and stamp the matching timestamp.

        The write is unconditional; moves off the Invited->Accepted->Completed
        and Invited->Declined paths are only logged.
        """
        async with self.uow:
            event = await load_event(self.uow, event_id)
            assignment = event.find_assignment(evaluator_id)
            if assignment is None:
                logger.warning(f"No assignment for evaluator {evaluator_id} on event {event_id}")
                raise NotFound("EvaluatorAssignment", [evaluator_id])

            if not assignment.status.is_expected_transition(status):
                logger.info(
                    f"Evaluator {evaluator_id} on event {event_id} moved "
                    f"{assignment.status.value} -> {status.value} outside the usual paths"
                )

            assignment.change_status(status)
            await self.uow.events.save_assignment(event.id, assignment)
            await self.uow.commit()

        logger.info(f"Evaluator {evaluator_id} on event {event_id} is now {status.value}")
        return assignment
