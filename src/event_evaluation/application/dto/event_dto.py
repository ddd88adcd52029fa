"""Data Transfer Objects for event lifecycle commands."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, FrozenSet, List, Optional

from ...domain.event_management.value_objects.event_mode import EventMode
from ...domain.event_management.value_objects.lock_scope import SCALAR_FIELDS

# Patch fields that steer the update rather than naming an event field
PATCH_CONTROL_FIELDS = ("expected_version", "locked", "clear_team")


@dataclass(frozen=True)
class CreateEventCommandDTO:
    """DTO for scheduling a new evaluation event."""

    name: str
    starts_at: datetime
    ends_at: datetime
    mode: EventMode = EventMode.STANDARD_EVALUATION
    criteria_ids: List[int] = field(default_factory=list)
    subject_ids: List[int] = field(default_factory=list)
    evaluator_ids: List[int] = field(default_factory=list)
    team_id: Optional[int] = None
    hide_subject_names: bool = False
    hide_preferred_positions: bool = False
    send_invites: bool = True

    def __post_init__(self) -> None:
        """Validate DTO after creation."""
        if not isinstance(self.mode, EventMode):
            object.__setattr__(self, "mode", EventMode(self.mode))
        for name in ("criteria_ids", "subject_ids", "evaluator_ids"):
            object.__setattr__(self, name, list(dict.fromkeys(getattr(self, name))))


@dataclass(frozen=True)
class EventPatchDTO:
    """Partial update of an event; ``None`` means the field is not part of the patch.

    ``team_id`` cannot be cleared through ``None``, so ``clear_team`` removes the team.
    """

    name: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    team_id: Optional[int] = None
    hide_subject_names: Optional[bool] = None
    hide_preferred_positions: Optional[bool] = None
    send_invites: Optional[bool] = None
    is_active: Optional[bool] = None
    locked: Optional[bool] = None
    criteria_ids: Optional[List[int]] = None
    subject_ids: Optional[List[int]] = None
    evaluator_ids: Optional[List[int]] = None
    expected_version: Optional[int] = None
    clear_team: bool = False

    def __post_init__(self) -> None:
        """Validate DTO after creation."""
        if self.clear_team and self.team_id is not None:
            raise ValueError("Cannot set and clear the team in one patch")

    def touched_fields(self) -> FrozenSet[str]:
        """Names of the event fields this patch targets."""
        touched = {
            f.name
            for f in fields(self)
            if f.name not in PATCH_CONTROL_FIELDS and getattr(self, f.name) is not None
        }
        if self.clear_team:
            touched.add("team_id")
        return frozenset(touched)

    def scalar_changes(self) -> Dict[str, Any]:
        """Scalar field values to write; a cleared team maps to ``None``."""
        return {
            name: getattr(self, name)
            for name in self.touched_fields()
            if name in SCALAR_FIELDS
        }


@dataclass(frozen=True)
class EvaluationRowDTO:
    """One scored cell in a submission; ``None`` value fields keep their stored value."""

    subject_id: int
    criterion_id: int
    score: Optional[Decimal] = None
    comment: Optional[str] = None
    choice_value: Optional[int] = None
    attempt_number: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate DTO after creation."""
        if self.score is not None and not isinstance(self.score, Decimal):
            object.__setattr__(self, "score", Decimal(str(self.score)))
        if self.attempt_number is not None and self.attempt_number < 1:
            raise ValueError("Attempt number must be at least 1")

    def values(self) -> Dict[str, Any]:
        """Value fields present in this row."""
        candidates = {
            "score": self.score,
            "comment": self.comment,
            "choice_value": self.choice_value,
            "attempt_number": self.attempt_number,
        }
        return {name: value for name, value in candidates.items() if value is not None}
