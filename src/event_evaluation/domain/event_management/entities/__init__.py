"""Event Management entities."""

from .evaluation_result import EvaluationResult
from .evaluator_assignment import EvaluatorAssignment
from .event import Event

__all__ = ["Event", "EvaluatorAssignment", "EvaluationResult"]
