"""Domain events for Event Management."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event."""

    event_id: UUID
    occurred_at: datetime
    event_type: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "event_type": self.event_type,
        }


def _envelope(event_type: str) -> Dict[str, Any]:
    return {"event_id": uuid4(), "occurred_at": datetime.utcnow(), "event_type": event_type}


@dataclass(frozen=True)
class EvaluationEventCreated(DomainEvent):
    """Event raised when a new evaluation event is scheduled."""

    evaluation_event_id: Optional[int]
    group_id: int
    mode: str

    def __post_init__(self):
        object.__setattr__(self, "event_type", "EvaluationEventCreated")

    @classmethod
    def build(
        cls, evaluation_event_id: Optional[int], group_id: int, mode: str
    ) -> "EvaluationEventCreated":
        return cls(
            **_envelope("EvaluationEventCreated"),
            evaluation_event_id=evaluation_event_id,
            group_id=group_id,
            mode=mode,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        base_dict = super().to_dict()
        base_dict.update(
            {
                "evaluation_event_id": self.evaluation_event_id,
                "group_id": self.group_id,
                "mode": self.mode,
            }
        )
        return base_dict


@dataclass(frozen=True)
class EvaluatorInvited(DomainEvent):
    """Event raised when an invitation is stamped for an evaluator."""

    evaluation_event_id: Optional[int]
    evaluator_id: int

    def __post_init__(self):
        object.__setattr__(self, "event_type", "EvaluatorInvited")

    @classmethod
    def build(cls, evaluation_event_id: Optional[int], evaluator_id: int) -> "EvaluatorInvited":
        return cls(
            **_envelope("EvaluatorInvited"),
            evaluation_event_id=evaluation_event_id,
            evaluator_id=evaluator_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        base_dict = super().to_dict()
        base_dict.update(
            {
                "evaluation_event_id": self.evaluation_event_id,
                "evaluator_id": self.evaluator_id,
            }
        )
        return base_dict


@dataclass(frozen=True)
class EvaluationEventLockChanged(DomainEvent):
    """Event raised when an evaluation event is locked or unlocked."""

    evaluation_event_id: int
    locked: bool

    def __post_init__(self):
        object.__setattr__(self, "event_type", "EvaluationEventLockChanged")

    @classmethod
    def build(cls, evaluation_event_id: int, locked: bool) -> "EvaluationEventLockChanged":
        return cls(
            **_envelope("EvaluationEventLockChanged"),
            evaluation_event_id=evaluation_event_id,
            locked=locked,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({"evaluation_event_id": self.evaluation_event_id, "locked": self.locked})
        return base_dict

