"""Database persistence for event evaluation."""

from .database import Base, DatabaseConfig, DatabaseManager
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "Base",
    "DatabaseConfig",
    "DatabaseManager",
    "SqlAlchemyUnitOfWork",
]
