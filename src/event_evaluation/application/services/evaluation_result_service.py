"""Recording and reading of evaluation results."""

import logging
from typing import Iterable, List, Optional

from ...domain.event_management.entities.evaluation_result import EvaluationResult
from ...domain.event_management.entities.event import Event
from ...domain.event_management.exceptions import (
    Conflict,
    EventEvaluationDomainException,
    NotFound,
)
from ...domain.event_management.repositories.evaluation_result_repository import ResultFilters
from ..dto.event_dto import EvaluationRowDTO
from ..interfaces.unit_of_work import UnitOfWork
from .event_loader import load_event

logger = logging.getLogger(__name__)


class EvaluationResultService:
    """Upsert scored results keyed by (event, subject, evaluator, criterion)."""

    def __init__(self, uow: UnitOfWork, require_acceptance: bool = False):
        self.uow = uow
        self.require_acceptance = require_acceptance

    async def submit(
        self, event_id: int, evaluator_id: int, rows: Iterable[EvaluationRowDTO]
    ) -> List[EvaluationResult]:
        """Record a batch of results atomically.

        Existing results keep any value field the row omits. The evaluator's
        assignment status is not touched.
        """
        rows = list(rows)
        try:
            logger.info(
                f"Submitting {len(rows)} evaluations for event {event_id} by evaluator {evaluator_id}"
            )

            async with self.uow:
                event = await load_event(self.uow, event_id)
                self._check_evaluator(event, evaluator_id)
                self._check_rows(event, rows)

                results = []
                for row in rows:
                    result = await self.uow.results.upsert(
                        event_id=event.id,
                        subject_id=row.subject_id,
                        evaluator_id=evaluator_id,
                        criterion_id=row.criterion_id,
                        values=row.values(),
                    )
                    results.append(result)
                await self.uow.commit()

            logger.info(f"Recorded {len(results)} results for event {event_id}")
            return results

        except EventEvaluationDomainException as e:
            logger.warning(f"Submission rejected for event {event_id}: {e}")
            raise

    async def get_results(
        self, event_id: int, filters: Optional[ResultFilters] = None
    ) -> List[EvaluationResult]:
        async with self.uow:
            await load_event(self.uow, event_id)
            return await self.uow.results.find(event_id, filters)

    async def add_note(
        self, event_id: int, result_id: int, evaluator_id: int, text: str
    ) -> EvaluationResult:
        async with self.uow:
            result = await self._load_result(event_id, result_id, evaluator_id)
            result.add_note(text)
            await self.uow.results.save_note(result)
            await self.uow.commit()
        return result

    async def update_note(
        self, event_id: int, result_id: int, evaluator_id: int, text: str
    ) -> EvaluationResult:
        async with self.uow:
            result = await self._load_result(event_id, result_id, evaluator_id)
            result.update_note(text)
            await self.uow.results.save_note(result)
            await self.uow.commit()
        return result

    async def delete_note(self, event_id: int, result_id: int, evaluator_id: int) -> EvaluationResult:
        """Clear a note; the result row itself stays."""
        async with self.uow:
            result = await self._load_result(event_id, result_id, evaluator_id)
            result.delete_note()
            await self.uow.results.save_note(result)
            await self.uow.commit()
        return result

    async def _load_result(
        self, event_id: int, result_id: int, evaluator_id: int
    ) -> EvaluationResult:
        result = await self.uow.results.find_for_evaluator(event_id, result_id, evaluator_id)
        if result is None:
            raise NotFound("EvaluationResult", [result_id])
        return result

    def _check_evaluator(self, event: Event, evaluator_id: int) -> None:
        assignment = event.find_assignment(evaluator_id)
        if assignment is None:
            raise NotFound("EvaluatorAssignment", [evaluator_id])
        if self.require_acceptance and not assignment.status.may_submit():
            raise Conflict(
                f"Evaluator {evaluator_id} has not accepted event {event.id} "
                f"(status {assignment.status.value})",
                details={"evaluator_id": evaluator_id, "status": assignment.status.value},
            )

    @staticmethod
    def _check_rows(event: Event, rows: List[EvaluationRowDTO]) -> None:
        subjects = set(event.subject_ids)
        missing_subjects = list(
            dict.fromkeys(r.subject_id for r in rows if r.subject_id not in subjects)
        )
        if missing_subjects:
            raise NotFound("Subject", missing_subjects)

        missing_criteria = list(
            dict.fromkeys(r.criterion_id for r in rows if r.criterion_id not in event.criteria)
        )
        if missing_criteria:
            raise NotFound(event.criteria.kind.capitalize(), missing_criteria)
