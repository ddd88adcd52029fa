"""Application services."""

from .criteria_assignment_service import CriteriaAssignmentService
from .evaluation_result_service import EvaluationResultService
from .evaluator_assignment_service import EvaluatorAssignmentService
from .progress_service import ProgressService
from .reference_resolver import ReferenceResolver
from .subject_assignment_service import SubjectAssignmentService

__all__ = [
    "CriteriaAssignmentService",
    "EvaluationResultService",
    "EvaluatorAssignmentService",
    "ProgressService",
    "ReferenceResolver",
    "SubjectAssignmentService",
]
