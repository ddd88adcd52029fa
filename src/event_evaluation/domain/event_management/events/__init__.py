"""Event Management domain events."""

from .event_events import (
    DomainEvent,
    EvaluationEventCreated,
    EvaluationEventLockChanged,
    EvaluatorInvited,
)

__all__ = [
    "DomainEvent",
    "EvaluationEventCreated",
    "EvaluationEventLockChanged",
    "EvaluatorInvited",
]
