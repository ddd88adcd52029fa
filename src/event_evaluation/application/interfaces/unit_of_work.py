"""Unit of Work pattern interface for transaction management."""

from abc import ABC, abstractmethod
from typing import Any

from ...domain.event_management.repositories.evaluation_result_repository import (
    EvaluationResultRepository,
)
from ...domain.event_management.repositories.event_repository import EventRepository


class UnitOfWork(ABC):
    """Abstract Unit of Work: every operation commits or rolls back as one transaction."""

    events: EventRepository
    results: EvaluationResultRepository

    async def __aenter__(self) -> "UnitOfWork":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction."""
        pass
