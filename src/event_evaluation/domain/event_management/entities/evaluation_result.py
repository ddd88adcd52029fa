"""Evaluation result entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from ..exceptions import Conflict, ValidationError

VALUE_FIELDS = ("score", "comment", "choice_value", "attempt_number")


@dataclass
class EvaluationResult:
    """One scored cell: (event, subject, evaluator, criterion)."""

    event_id: int
    subject_id: int
    evaluator_id: int
    criterion_id: int
    score: Optional[Decimal] = None
    comment: Optional[str] = None
    choice_value: Optional[int] = None
    attempt_number: Optional[int] = None
    note: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> Tuple[int, int, int, int]:
        """Unique key of this result."""
        return (self.event_id, self.subject_id, self.evaluator_id, self.criterion_id)

    @property
    def cell(self) -> Tuple[int, int]:
        """(subject, criterion) cell this result fills."""
        return (self.subject_id, self.criterion_id)

    def has_note(self) -> bool:
        return bool(self.note)

    def apply(self, values: Dict[str, Any]) -> None:
        """Overwrite only the value fields present in ``values``."""
        for name in VALUE_FIELDS:
            if name in values:
                setattr(self, name, values[name])
        self.updated_at = datetime.utcnow()

    def add_note(self, text: str) -> None:
        """Attach a note; refuses to overwrite an existing one."""
        self._require_text(text)
        if self.has_note():
            raise Conflict(
                f"Result {self.id} already has a note; update it instead",
                details={"result_id": self.id},
            )
        self.note = text
        self.updated_at = datetime.utcnow()

    def update_note(self, text: str) -> None:
        """Replace an existing note; refuses when there is none."""
        self._require_text(text)
        if not self.has_note():
            raise Conflict(
                f"Result {self.id} has no note to update; add one first",
                details={"result_id": self.id},
            )
        self.note = text
        self.updated_at = datetime.utcnow()

    def delete_note(self) -> None:
        """Clear the note without removing the result."""
        self.note = ""
        self.updated_at = datetime.utcnow()

    @staticmethod
    def _require_text(text: str) -> None:
        if text is None or not text.strip():
            raise ValidationError("Note text cannot be empty", field_name="note")
