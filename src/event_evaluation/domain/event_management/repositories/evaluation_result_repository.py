"""Evaluation result repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from ..entities.evaluation_result import EvaluationResult


@dataclass(frozen=True)
class ResultFilters:
    """AND-composed optional filters for reading results."""

    subject_id: Optional[int] = None
    evaluator_id: Optional[int] = None
    criterion_id: Optional[int] = None


class EvaluationResultRepository(ABC):
    """Repository interface for evaluation results."""

    @abstractmethod
    async def upsert(
        self,
        event_id: int,
        subject_id: int,
        evaluator_id: int,
        criterion_id: int,
        values: Dict[str, Any],
    ) -> EvaluationResult:
        """Insert a result or, on key conflict, overwrite only the fields in ``values``."""
        pass

    @abstractmethod
    async def find(
        self, event_id: int, filters: Optional[ResultFilters] = None
    ) -> List[EvaluationResult]:
        """Find results of an event."""
        pass

    @abstractmethod
    async def find_for_evaluator(
        self, event_id: int, result_id: int, evaluator_id: int
    ) -> Optional[EvaluationResult]:
        """Find one result owned by an evaluator within an event."""
        pass

    @abstractmethod
    async def save_note(self, result: EvaluationResult) -> None:
        """Persist the note of an existing result."""
        pass

    @abstractmethod
    async def filled_cells(self, event_id: int) -> Dict[int, Set[Tuple[int, int]]]:
        """Map evaluator id to the (subject, criterion) cells it has results for."""
        pass
