"""Event aggregate root for Event Management domain."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from ..events.event_events import (
    DomainEvent,
    EvaluationEventCreated,
    EvaluationEventLockChanged,
    EvaluatorInvited,
)
from ..exceptions import LockedEvent, StaleWrite, ValidationError
from ..value_objects.criteria import Criteria, criteria_for_mode
from ..value_objects.event_mode import EventMode
from ..value_objects.lock_scope import SCALAR_FIELDS, LockScope
from ..value_objects.sync_result import SyncResult
from .evaluator_assignment import EvaluatorAssignment

# Flags a SelfAssessment event always carries, whatever the caller asks for.
SELF_ASSESSMENT_FORCED_FLAGS: Dict[str, bool] = {
    "hide_subject_names": False,
    "hide_preferred_positions": False,
    "send_invites": True,
}


@dataclass
class Event:
    """Evaluation event aggregate root."""

    name: str
    mode: EventMode
    starts_at: datetime
    ends_at: datetime
    group_id: int
    criteria: Criteria
    subject_ids: List[int] = field(default_factory=list)
    assignments: List[EvaluatorAssignment] = field(default_factory=list)
    team_id: Optional[int] = None
    created_by_id: Optional[int] = None
    hide_subject_names: bool = False
    hide_preferred_positions: bool = False
    send_invites: bool = True
    is_active: bool = True
    locked: bool = False
    version: int = 1
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create(
        cls,
        name: str,
        mode: EventMode,
        starts_at: datetime,
        ends_at: datetime,
        group_id: int,
        criteria_ids: Iterable[int],
        subject_ids: Iterable[int],
        evaluator_ids: Iterable[int],
        team_id: Optional[int] = None,
        created_by_id: Optional[int] = None,
        hide_subject_names: bool = False,
        hide_preferred_positions: bool = False,
        send_invites: bool = True,
    ) -> "Event":
        """Factory method for scheduling new events.

        The caller decides where ``evaluator_ids`` come from; for SelfAssessment
        that is the group's Evaluator-role membership.
        """
        if not name or not name.strip():
            raise ValidationError("Event name cannot be empty", field_name="name")
        _check_window(starts_at, ends_at)

        now = datetime.utcnow()
        event = cls(
            name=name.strip(),
            mode=mode,
            starts_at=starts_at,
            ends_at=ends_at,
            group_id=group_id,
            criteria=criteria_for_mode(mode, criteria_ids),
            subject_ids=list(dict.fromkeys(subject_ids)),
            team_id=team_id,
            created_by_id=created_by_id,
            hide_subject_names=hide_subject_names,
            hide_preferred_positions=hide_preferred_positions,
            send_invites=send_invites,
            created_at=now,
            updated_at=now,
        )
        event._enforce_mode_flags()
        event.assignments = [
            EvaluatorAssignment.invite(evaluator_id, event.send_invites)
            for evaluator_id in dict.fromkeys(evaluator_ids)
        ]
        return event

    # Lock handling

    def guard_unlocked(self, fields: Iterable[str]) -> None:
        """Fail if the event is locked; used for relationship edits."""
        if self.locked:
            raise LockedEvent(self.id, fields)

    def ensure_patch_allowed(self, fields: Iterable[str], scope: LockScope) -> None:
        """Fail if a locked event's protected fields are touched under ``scope``."""
        if not self.locked:
            return
        blocked = scope.blocked(frozenset(fields))
        if blocked:
            raise LockedEvent(self.id, blocked)

    def set_locked(self, locked: bool) -> None:
        """Toggle the lock; always permitted."""
        changed = self.locked != locked
        self.locked = locked
        self.updated_at = datetime.utcnow()
        if changed and self.id is not None:
            self._add_domain_event(EvaluationEventLockChanged.build(self.id, locked))

    def check_version(self, expected_version: Optional[int]) -> None:
        """Fail if the caller's view of the event is stale."""
        if expected_version is not None and expected_version != self.version:
            raise StaleWrite(self.id, expected_version, self.version)

    # Scalar fields

    def apply_scalar_changes(self, changes: Dict[str, Any]) -> None:
        """Apply scalar field changes; unknown keys are rejected."""
        unknown = set(changes) - SCALAR_FIELDS
        if unknown:
            raise ValidationError(f"Unknown event fields: {', '.join(sorted(unknown))}")

        if "name" in changes and (not changes["name"] or not str(changes["name"]).strip()):
            raise ValidationError("Event name cannot be empty", field_name="name")

        starts_at = changes.get("starts_at", self.starts_at)
        ends_at = changes.get("ends_at", self.ends_at)
        _check_window(starts_at, ends_at)

        for name, value in changes.items():
            setattr(self, name, value.strip() if name == "name" else value)

        self._enforce_mode_flags()
        self.updated_at = datetime.utcnow()

    def _enforce_mode_flags(self) -> None:
        if self.mode is EventMode.SELF_ASSESSMENT:
            for name, value in SELF_ASSESSMENT_FORCED_FLAGS.items():
                setattr(self, name, value)

    # Relationships

    @property
    def evaluator_ids(self) -> List[int]:
        return [a.evaluator_id for a in self.assignments]

    def find_assignment(self, evaluator_id: int) -> Optional[EvaluatorAssignment]:
        for assignment in self.assignments:
            if assignment.evaluator_id == evaluator_id:
                return assignment
        return None

    def sync_assignments(self, desired_ids: Iterable[int]) -> SyncResult:
        """Reconcile evaluator membership; removed rows are dropped, added rows invited."""
        self.guard_unlocked(["evaluator_ids"])
        result = SyncResult.compute(self.evaluator_ids, desired_ids)
        removed = set(result.removed)

        self.assignments = [a for a in self.assignments if a.evaluator_id not in removed]
        for evaluator_id in result.added:
            self.assignments.append(
                EvaluatorAssignment.invite(evaluator_id, self.send_invites, event_id=self.id)
            )

        if result.has_changes:
            self.updated_at = datetime.utcnow()
        return result

    def add_assignment(self, evaluator_id: int) -> EvaluatorAssignment:
        """Invite a single evaluator; returns the existing assignment if present."""
        self.guard_unlocked(["evaluator_ids"])
        existing = self.find_assignment(evaluator_id)
        if existing is not None:
            return existing
        assignment = EvaluatorAssignment.invite(evaluator_id, self.send_invites, event_id=self.id)
        self.assignments.append(assignment)
        self.updated_at = datetime.utcnow()
        return assignment

    def replace_criteria(self, desired_ids: Iterable[int]) -> SyncResult:
        """Replace the whole criteria association."""
        self.guard_unlocked(["criteria_ids"])
        result = SyncResult.compute(self.criteria.ids, desired_ids)
        self.criteria = self.criteria.replace(result.after)
        if result.has_changes:
            self.updated_at = datetime.utcnow()
        return result

    def replace_subjects(self, desired_ids: Iterable[int]) -> SyncResult:
        """Replace the whole subject set."""
        self.guard_unlocked(["subject_ids"])
        result = SyncResult.compute(self.subject_ids, desired_ids)
        self.subject_ids = list(result.after)
        if result.has_changes:
            self.updated_at = datetime.utcnow()
        return result

    def add_subjects(self, subject_ids: Iterable[int]) -> List[int]:
        """Add subjects, ignoring ones already present; returns the newly added ids."""
        self.guard_unlocked(["subject_ids"])
        new_ids = [i for i in dict.fromkeys(subject_ids) if i not in self.subject_ids]
        self.subject_ids.extend(new_ids)
        if new_ids:
            self.updated_at = datetime.utcnow()
        return new_ids

    def remove_subjects(self, subject_ids: Iterable[int]) -> List[int]:
        """Remove subjects, ignoring unknown ids; returns the ids actually removed."""
        self.guard_unlocked(["subject_ids"])
        to_remove = set(subject_ids)
        removed = [i for i in self.subject_ids if i in to_remove]
        self.subject_ids = [i for i in self.subject_ids if i not in to_remove]
        if removed:
            self.updated_at = datetime.utcnow()
        return removed

    @property
    def expected_result_count(self) -> int:
        """Cells each evaluator is expected to fill: subjects x criteria."""
        return len(self.subject_ids) * len(self.criteria)

    # Domain events

    def record_creation(self) -> None:
        """Record creation and invitation events once the event has an id."""
        self._add_domain_event(
            EvaluationEventCreated.build(self.id, self.group_id, self.mode.value)
        )
        self.record_invitations(self.assignments)

    def record_invitations(self, assignments: Iterable[EvaluatorAssignment]) -> None:
        for assignment in assignments:
            if assignment.was_notified:
                self._add_domain_event(EvaluatorInvited.build(self.id, assignment.evaluator_id))

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add domain event to internal list."""
        self._domain_events.append(event)

    def get_domain_events(self) -> List[DomainEvent]:
        """Get all domain events."""
        return self._domain_events.copy()

    def clear_domain_events(self) -> None:
        """Clear all domain events (typically called after publishing)."""
        self._domain_events.clear()

    def __str__(self) -> str:
        return (
            f"Event(id={self.id}, name='{self.name}', mode={self.mode.value}, "
            f"locked={self.locked}, subjects={len(self.subject_ids)}, "
            f"criteria={len(self.criteria)}, evaluators={len(self.assignments)})"
        )

    def __eq__(self, other) -> bool:
        """Equality comparison based on ID."""
        if not isinstance(other, Event):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID."""
        return hash(self.id) if self.id is not None else id(self)


def _check_window(starts_at: datetime, ends_at: datetime) -> None:
    if starts_at > ends_at:
        raise ValidationError("Event start must not be after its end", field_name="starts_at")

