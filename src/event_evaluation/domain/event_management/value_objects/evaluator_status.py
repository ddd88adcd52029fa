"""Evaluator status value object for Event Management domain."""

from enum import Enum
from typing import Set


class EvaluatorStatus(Enum):
    """Evaluator assignment lifecycle status enumeration."""

    INVITED = "INVITED"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    COMPLETED = "COMPLETED"

    def is_expected_transition(self, target_status: "EvaluatorStatus") -> bool:
        """Check if target lies on the Invited->Accepted->Completed or Invited->Declined paths."""
        return target_status in self._get_expected_transitions()

    def _get_expected_transitions(self) -> Set["EvaluatorStatus"]:
        """Get transitions on the documented paths from current status."""
        transition_map = {
            EvaluatorStatus.INVITED: {EvaluatorStatus.ACCEPTED, EvaluatorStatus.DECLINED},
            EvaluatorStatus.ACCEPTED: {EvaluatorStatus.COMPLETED},
            EvaluatorStatus.DECLINED: set(),
            EvaluatorStatus.COMPLETED: set(),
        }
        return transition_map.get(self, set())

    def may_submit(self) -> bool:
        """Check if an evaluator in this status has accepted the work."""
        return self in {EvaluatorStatus.ACCEPTED, EvaluatorStatus.COMPLETED}

    def __str__(self) -> str:
        """String representation of status."""
        return self.value

    def __repr__(self) -> str:
        """Detailed string representation."""
        return f"EvaluatorStatus.{self.name}"
