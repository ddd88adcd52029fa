"""Evaluation result repository implementation."""

from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ....domain.event_management.entities.evaluation_result import (
    VALUE_FIELDS,
    EvaluationResult,
)
from ....domain.event_management.repositories.evaluation_result_repository import (
    EvaluationResultRepository,
    ResultFilters,
)
from ..models.event_models import EvaluationResultModel
from .mappers.evaluation_result_mapper import EvaluationResultMapper

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

RESULT_KEY = ("event_id", "subject_id", "evaluator_id", "criterion_id")


class EvaluationResultRepositoryImpl(EvaluationResultRepository):
    """SQLAlchemy implementation of EvaluationResultRepository."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = EvaluationResultMapper()

    async def upsert(
        self,
        event_id: int,
        subject_id: int,
        evaluator_id: int,
        criterion_id: int,
        values: Dict[str, Any],
    ) -> EvaluationResult:
        """Single-statement upsert keyed on (event, subject, evaluator, criterion).

        On conflict only the columns present in ``values`` are overwritten.
        """
        dialect = self.session.get_bind().dialect.name
        insert_for_dialect = UPSERT_INSERTS.get(dialect)
        if insert_for_dialect is None:
            raise RuntimeError(f"Result upsert is not supported on dialect '{dialect}'")

        now = datetime.utcnow()
        present = {name: values[name] for name in VALUE_FIELDS if name in values}

        query = insert_for_dialect(EvaluationResultModel.__table__).values(
            event_id=event_id,
            subject_id=subject_id,
            evaluator_id=evaluator_id,
            criterion_id=criterion_id,
            created_at=now,
            updated_at=now,
            **present,
        )
        overwrite = {name: query.excluded[name] for name in present}
        overwrite["updated_at"] = now
        query = query.on_conflict_do_update(index_elements=list(RESULT_KEY), set_=overwrite)
        await self.session.execute(query)

        stored = await self.session.execute(
            select(EvaluationResultModel)
            .where(
                EvaluationResultModel.event_id == event_id,
                EvaluationResultModel.subject_id == subject_id,
                EvaluationResultModel.evaluator_id == evaluator_id,
                EvaluationResultModel.criterion_id == criterion_id,
            )
            .execution_options(populate_existing=True)
        )
        return self.mapper.to_domain(stored.scalar_one())

    async def find(
        self, event_id: int, filters: Optional[ResultFilters] = None
    ) -> List[EvaluationResult]:
        """Find results of an event, AND-composing the given filters."""
        query = select(EvaluationResultModel).where(EvaluationResultModel.event_id == event_id)

        if filters is not None:
            if filters.subject_id is not None:
                query = query.where(EvaluationResultModel.subject_id == filters.subject_id)
            if filters.evaluator_id is not None:
                query = query.where(EvaluationResultModel.evaluator_id == filters.evaluator_id)
            if filters.criterion_id is not None:
                query = query.where(EvaluationResultModel.criterion_id == filters.criterion_id)

        query = query.order_by(EvaluationResultModel.id).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return [self.mapper.to_domain(model) for model in result.scalars().all()]

    async def find_for_evaluator(
        self, event_id: int, result_id: int, evaluator_id: int
    ) -> Optional[EvaluationResult]:
        query = select(EvaluationResultModel).where(
            EvaluationResultModel.id == result_id,
            EvaluationResultModel.event_id == event_id,
            EvaluationResultModel.evaluator_id == evaluator_id,
        )
        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return self.mapper.to_domain(model) if model is not None else None

    async def save_note(self, result: EvaluationResult) -> None:
        query = (
            update(EvaluationResultModel)
            .where(EvaluationResultModel.id == result.id)
            .values(note=result.note, updated_at=result.updated_at or datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(query)

    async def filled_cells(self, event_id: int) -> Dict[int, Set[Tuple[int, int]]]:
        """Distinct (subject, criterion) cells per evaluator."""
        query = (
            select(
                EvaluationResultModel.evaluator_id,
                EvaluationResultModel.subject_id,
                EvaluationResultModel.criterion_id,
            )
            .where(EvaluationResultModel.event_id == event_id)
            .distinct()
        )
        result = await self.session.execute(query)

        cells: Dict[int, Set[Tuple[int, int]]] = defaultdict(set)
        for evaluator_id, subject_id, criterion_id in result.all():
            cells[evaluator_id].add((subject_id, criterion_id))
        return dict(cells)
