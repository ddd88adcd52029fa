"""Evaluator progress value object."""

from dataclasses import dataclass
from typing import Any, Dict

from .evaluator_status import EvaluatorStatus


@dataclass(frozen=True)
class EvaluatorProgress:
    """Completion of one evaluator within an event."""

    evaluator_id: int
    status: EvaluatorStatus
    completed: int
    total: int
    percentage: float

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.completed >= self.total

    def to_dict(self) -> Dict[str, Any]:
        """Convert progress to dictionary."""
        return {
            "evaluator": self.evaluator_id,
            "status": self.status.value,
            "progress": {
                "completed": self.completed,
                "total": self.total,
                "percentage": self.percentage,
            },
        }
