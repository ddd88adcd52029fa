"""Event mode value object for Event Management domain."""

from enum import Enum


class EventMode(Enum):
    """Evaluation event mode enumeration."""

    STANDARD_EVALUATION = "STANDARD_EVALUATION"
    SELF_ASSESSMENT = "SELF_ASSESSMENT"

    @property
    def criterion_kind(self) -> str:
        """Kind of catalog entry scored in this mode."""
        return "skill" if self is EventMode.STANDARD_EVALUATION else "metric"

    def broadcasts_to_evaluators(self) -> bool:
        """Check if assignees come from group role membership instead of the caller."""
        return self is EventMode.SELF_ASSESSMENT

    def __str__(self) -> str:
        """String representation of mode."""
        return self.value
