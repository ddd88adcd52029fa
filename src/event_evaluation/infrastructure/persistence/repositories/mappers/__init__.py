"""Mappers between domain entities and database models."""

from .evaluation_result_mapper import EvaluationResultMapper
from .event_mapper import EventMapper

__all__ = ["EventMapper", "EvaluationResultMapper"]
