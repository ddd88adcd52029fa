"""Use case for deleting evaluation events."""

import logging

from ....domain.event_management.exceptions import EventEvaluationDomainException, LockedEvent
from ...interfaces.unit_of_work import UnitOfWork
from ...services.event_loader import load_event

logger = logging.getLogger(__name__)


class DeleteEventUseCase:
    """Use case for removing an unlocked event together with everything it owns."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_id: int) -> bool:
        try:
            async with self.uow:
                event = await load_event(self.uow, event_id)
                if event.locked:
                    raise LockedEvent(event_id, ["event"])

                await self.uow.events.delete(event_id)
                await self.uow.commit()

            logger.info(f"Event deleted: {event_id}")
            return True

        except EventEvaluationDomainException as e:
            logger.warning(f"Deletion of event {event_id} rejected: {e}")
            raise
