"""Evaluator assignment entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects.evaluator_status import EvaluatorStatus


@dataclass
class EvaluatorAssignment:
    """Assignment of one evaluator identity to one event."""

    evaluator_id: int
    status: EvaluatorStatus = EvaluatorStatus.INVITED
    invitation_sent_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    id: Optional[int] = None
    event_id: Optional[int] = None

    @classmethod
    def invite(
        cls, evaluator_id: int, send_invites: bool, event_id: Optional[int] = None
    ) -> "EvaluatorAssignment":
        """Factory method for a fresh Invited assignment."""
        return cls(
            evaluator_id=evaluator_id,
            status=EvaluatorStatus.INVITED,
            invitation_sent_at=datetime.utcnow() if send_invites else None,
            event_id=event_id,
        )

    def change_status(self, status: EvaluatorStatus, at: Optional[datetime] = None) -> None:
        """Write a new status and stamp the matching timestamp."""
        at = at or datetime.utcnow()
        self.status = status

        if status == EvaluatorStatus.ACCEPTED:
            self.accepted_at = at
        elif status == EvaluatorStatus.COMPLETED:
            self.completed_at = at
        elif status == EvaluatorStatus.INVITED:
            self.invitation_sent_at = at

    @property
    def was_notified(self) -> bool:
        return self.invitation_sent_at is not None

    def __str__(self) -> str:
        return f"EvaluatorAssignment(evaluator={self.evaluator_id}, status={self.status.value})"
