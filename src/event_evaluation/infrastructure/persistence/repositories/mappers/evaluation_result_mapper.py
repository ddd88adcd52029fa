"""Domain-model mapper for evaluation results."""

from .....domain.event_management.entities.evaluation_result import EvaluationResult
from ...models.event_models import EvaluationResultModel


class EvaluationResultMapper:
    """Mapper between EvaluationResult entities and database models."""

    def to_domain(self, model: EvaluationResultModel) -> EvaluationResult:
        return EvaluationResult(
            id=model.id,
            event_id=model.event_id,
            subject_id=model.subject_id,
            evaluator_id=model.evaluator_id,
            criterion_id=model.criterion_id,
            score=model.score,
            comment=model.comment,
            choice_value=model.choice_value,
            attempt_number=model.attempt_number,
            note=model.note,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
