"""Use case for partially updating evaluation events."""

import logging
from typing import Optional

from ....domain.event_management.entities.event import Event
from ....domain.event_management.exceptions import EventEvaluationDomainException
from ....domain.event_management.value_objects.lock_scope import LockScope
from ...dto.event_dto import EventPatchDTO
from ...interfaces.domain_event_publisher import DomainEventPublisher
from ...interfaces.unit_of_work import UnitOfWork
from ...services.criteria_assignment_service import CriteriaAssignmentService
from ...services.evaluator_assignment_service import EvaluatorAssignmentService
from ...services.event_loader import load_event
from ...services.event_publication import publish_pending_events
from ...services.reference_resolver import ReferenceResolver
from ...services.subject_assignment_service import SubjectAssignmentService

logger = logging.getLogger(__name__)


class UpdateEventUseCase:
    """Use case for true partial updates routed by event mode.

    Only fields present in the patch are validated and written. The lock check
    uses the lock state the event had before the patch; a ``locked`` value in
    the patch is applied last and is never itself blocked.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: ReferenceResolver,
        evaluator_service: EvaluatorAssignmentService,
        criteria_service: CriteriaAssignmentService,
        subject_service: SubjectAssignmentService,
        event_publisher: DomainEventPublisher,
        lock_scope: LockScope = LockScope.ALL,
    ):
        self.uow = uow
        self.resolver = resolver
        self.evaluator_service = evaluator_service
        self.criteria_service = criteria_service
        self.subject_service = subject_service
        self.event_publisher = event_publisher
        self.lock_scope = lock_scope

    async def execute(
        self,
        group_id: int,
        event_id: int,
        patch: EventPatchDTO,
        actor_id: Optional[int] = None,
    ) -> Event:
        try:
            logger.info(
                f"Updating event {event_id} in group {group_id} by {actor_id}: "
                f"{sorted(patch.touched_fields())}"
            )
            await self.resolver.require_group(group_id)

            async with self.uow:
                # Step 1: Load and check the caller's view is current
                event = await load_event(self.uow, event_id, group_id)
                event.check_version(patch.expected_version)

                # Step 2: Route to the mode-specific updater
                if event.mode.broadcasts_to_evaluators():
                    await self._update_self_assessment(event, patch)
                else:
                    await self._update_standard_evaluation(event, patch)

                # Step 3: Scalar fields, then the lock flag
                if patch.team_id is not None:
                    await self.resolver.require_team(group_id, patch.team_id)
                scalar_changes = patch.scalar_changes()
                if scalar_changes:
                    event.apply_scalar_changes(scalar_changes)
                if patch.locked is not None:
                    event.set_locked(patch.locked)

                # Step 4: Persist with optimistic version check
                await self.uow.events.save(event, patch.expected_version)
                await self.uow.commit()

            await publish_pending_events(self.event_publisher, event)

            logger.info(f"Event updated: {event}")
            return event

        except EventEvaluationDomainException as e:
            logger.warning(f"Update of event {event_id} rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error updating event {event_id}: {e}", exc_info=True)
            raise

    async def _update_standard_evaluation(self, event: Event, patch: EventPatchDTO) -> None:
        event.ensure_patch_allowed(patch.touched_fields(), self.lock_scope)

        if patch.criteria_ids is not None:
            await self.criteria_service.apply_sync(event, patch.criteria_ids)
        if patch.subject_ids is not None:
            await self.subject_service.apply_replace(event, patch.subject_ids)
        if patch.evaluator_ids is not None:
            await self.evaluator_service.apply_sync(event, patch.evaluator_ids)

    async def _update_self_assessment(self, event: Event, patch: EventPatchDTO) -> None:
        """Evaluators always come from current Evaluator-role membership, never the patch.

        A locked event keeps its assignments; the broadcast is re-applied once unlocked.
        """
        touched = patch.touched_fields() - {"evaluator_ids"}
        event.ensure_patch_allowed(touched, self.lock_scope)

        if patch.evaluator_ids is not None:
            logger.debug(f"Ignoring caller evaluator ids for self assessment event {event.id}")

        if patch.criteria_ids is not None:
            await self.criteria_service.apply_sync(event, patch.criteria_ids)
        if patch.subject_ids is not None:
            await self.subject_service.apply_replace(event, patch.subject_ids)

        if event.locked:
            logger.debug(f"Skipping evaluator broadcast for locked event {event.id}")
            return
        members = await self.resolver.evaluator_role_members(event.group_id)
        result = await self.evaluator_service.apply_sync(event, members)
        if result.has_changes:
            logger.info(
                f"Self assessment {event.id} evaluators refreshed: "
                f"added={result.added} removed={result.removed}"
            )
