"""Event Management repository interfaces."""

from .evaluation_result_repository import EvaluationResultRepository, ResultFilters
from .event_repository import EventFilters, EventRepository

__all__ = ["EventRepository", "EventFilters", "EvaluationResultRepository", "ResultFilters"]
