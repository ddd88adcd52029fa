"""SQLAlchemy Unit of Work implementation."""

import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...application.interfaces.unit_of_work import UnitOfWork
from .database import SessionFactory
from .repositories.evaluation_result_repository_impl import EvaluationResultRepositoryImpl
from .repositories.event_repository_impl import EventRepositoryImpl

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of Work over one AsyncSession per ``async with`` block.

    Repositories are bound to the session, so everything done inside the block
    commits or rolls back together. Not safe to share between concurrent tasks.
    """

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        if self.session is not None:
            raise RuntimeError("Unit of work is already active")

        self.session = self.session_factory()
        self.events = EventRepositoryImpl(self.session)
        self.results = EvaluationResultRepositoryImpl(self.session)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self.session.close()
            self.session = None

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        logger.debug("Rolling back unit of work")
        await self.session.rollback()
