"""Evaluator progress reporting."""

import logging
from typing import List, Optional

from ...domain.event_management.services.progress_calculator import ProgressCalculator
from ...domain.event_management.value_objects.evaluator_progress import EvaluatorProgress
from ..interfaces.unit_of_work import UnitOfWork
from .event_loader import load_event

logger = logging.getLogger(__name__)


class ProgressService:
    """Read-only progress of every evaluator assigned to an event."""

    def __init__(self, uow: UnitOfWork, calculator: Optional[ProgressCalculator] = None):
        self.uow = uow
        self.calculator = calculator or ProgressCalculator()

    async def get_progress(self, event_id: int) -> List[EvaluatorProgress]:
        async with self.uow:
            event = await load_event(self.uow, event_id)
            filled_cells = await self.uow.results.filled_cells(event_id)

        progress = self.calculator.calculate(event, filled_cells)
        logger.debug(f"Progress for event {event_id}: {[p.to_dict() for p in progress]}")
        return progress
