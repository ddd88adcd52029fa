"""Per-evaluator completion derived from recorded results."""

from typing import Dict, List, Set, Tuple

from ..entities.event import Event
from ..value_objects.evaluator_progress import EvaluatorProgress


class ProgressCalculator:
    """Compute evaluator progress as distinct filled cells over subjects x criteria.

    Results for subjects or criteria no longer on the event are ignored, so
    ``completed`` never exceeds ``total``. A zero ``total`` yields 0.0 percent.
    """

    def calculate(
        self, event: Event, filled_cells: Dict[int, Set[Tuple[int, int]]]
    ) -> List[EvaluatorProgress]:
        total = event.expected_result_count
        subjects = set(event.subject_ids)
        criteria = set(event.criteria.ids)

        progress = []
        for assignment in event.assignments:
            cells = filled_cells.get(assignment.evaluator_id, set())
            completed = sum(
                1 for subject_id, criterion_id in cells
                if subject_id in subjects and criterion_id in criteria
            )
            progress.append(
                EvaluatorProgress(
                    evaluator_id=assignment.evaluator_id,
                    status=assignment.status,
                    completed=completed,
                    total=total,
                    percentage=self.percentage(completed, total),
                )
            )
        return progress

    @staticmethod
    def percentage(completed: int, total: int) -> float:
        if total <= 0:
            return 0.0
        return round(completed / total * 100, 2)
