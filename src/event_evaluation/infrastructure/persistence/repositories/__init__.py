"""Repository implementations for database persistence."""

from .directory_readers_impl import SqlCatalogReader, SqlIdentityReader, SqlRosterReader
from .evaluation_result_repository_impl import EvaluationResultRepositoryImpl
from .event_repository_impl import EventRepositoryImpl

__all__ = [
    "EventRepositoryImpl",
    "EvaluationResultRepositoryImpl",
    "SqlRosterReader",
    "SqlCatalogReader",
    "SqlIdentityReader",
]
