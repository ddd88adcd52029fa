"""Use case for scheduling new evaluation events."""

import logging
from typing import List, Optional

from ....domain.event_management.entities.event import Event
from ....domain.event_management.exceptions import EventEvaluationDomainException
from ....domain.event_management.value_objects.event_mode import EventMode
from ...dto.event_dto import CreateEventCommandDTO
from ...interfaces.domain_event_publisher import DomainEventPublisher
from ...interfaces.unit_of_work import UnitOfWork
from ...services.event_publication import publish_pending_events
from ...services.reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


class CreateEventUseCase:
    """Use case for creating events, branching on StandardEvaluation vs SelfAssessment."""

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: ReferenceResolver,
        event_publisher: DomainEventPublisher,
    ):
        self.uow = uow
        self.resolver = resolver
        self.event_publisher = event_publisher

    async def execute(
        self, group_id: int, command: CreateEventCommandDTO, creator_id: Optional[int] = None
    ) -> Event:
        """Validate every reference, then persist the event and its assignments together."""
        try:
            logger.info(f"Creating {command.mode.value} event '{command.name}' in group {group_id}")

            # Step 1: Validate owning group and team
            await self.resolver.require_group(group_id)
            await self.resolver.require_team(group_id, command.team_id)

            # Step 2: Build the aggregate for the requested mode
            if command.mode.broadcasts_to_evaluators():
                event = await self._build_self_assessment(group_id, command, creator_id)
            else:
                event = await self._build_standard_evaluation(group_id, command, creator_id)

            # Step 3: Persist event, subjects, criteria and assignments in one transaction
            async with self.uow:
                await self.uow.events.add(event)
                event.record_creation()
                await self.uow.commit()

            # Step 4: Fire invitation triggers
            await publish_pending_events(self.event_publisher, event)

            logger.info(
                f"Event created: {event.id} with {len(event.subject_ids)} subjects, "
                f"{len(event.criteria)} {event.criteria.kind}s, {len(event.assignments)} evaluators"
            )
            return event

        except EventEvaluationDomainException as e:
            logger.warning(f"Event creation rejected in group {group_id}: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error during event creation: {e}", exc_info=True)
            raise

    async def _build_standard_evaluation(
        self, group_id: int, command: CreateEventCommandDTO, creator_id: Optional[int]
    ) -> Event:
        """External evaluators chosen by the caller score subjects against skills."""
        await self.resolver.require_criteria(
            group_id, EventMode.STANDARD_EVALUATION, command.criteria_ids
        )
        await self.resolver.require_subjects(group_id, command.subject_ids)
        await self.resolver.require_identities(command.evaluator_ids)

        return self._build(group_id, command, creator_id, command.evaluator_ids)

    async def _build_self_assessment(
        self, group_id: int, command: CreateEventCommandDTO, creator_id: Optional[int]
    ) -> Event:
        """Subjects score themselves against metrics; every Evaluator-role member is assigned.

        Caller-supplied evaluator ids are ignored.
        """
        await self.resolver.require_criteria(
            group_id, EventMode.SELF_ASSESSMENT, command.criteria_ids
        )
        await self.resolver.require_subjects(group_id, command.subject_ids)

        if command.evaluator_ids:
            logger.debug(
                f"Ignoring caller evaluator ids {command.evaluator_ids} for self assessment"
            )
        evaluator_ids = await self.resolver.evaluator_role_members(group_id)

        return self._build(group_id, command, creator_id, evaluator_ids)

    @staticmethod
    def _build(
        group_id: int,
        command: CreateEventCommandDTO,
        creator_id: Optional[int],
        evaluator_ids: List[int],
    ) -> Event:
        return Event.create(
            name=command.name,
            mode=command.mode,
            starts_at=command.starts_at,
            ends_at=command.ends_at,
            group_id=group_id,
            criteria_ids=command.criteria_ids,
            subject_ids=command.subject_ids,
            evaluator_ids=evaluator_ids,
            team_id=command.team_id,
            created_by_id=creator_id,
            hide_subject_names=command.hide_subject_names,
            hide_preferred_positions=command.hide_preferred_positions,
            send_invites=command.send_invites,
        )
