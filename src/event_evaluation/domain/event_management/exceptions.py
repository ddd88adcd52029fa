"""Domain exceptions for Event Management."""

from typing import Any, Dict, Iterable, List, Optional


class EventEvaluationDomainException(Exception):
    """Base exception for Event Management domain."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFound(EventEvaluationDomainException):
    """Exception raised when referenced resources do not exist or are not group-owned."""

    def __init__(self, resource: str, missing_ids: Iterable[Any]):
        self.resource = resource
        self.missing_ids: List[Any] = list(missing_ids)
        joined = ", ".join(str(i) for i in self.missing_ids)
        super().__init__(
            f"{resource} not found: {joined}",
            details={"resource": resource, "missing_ids": self.missing_ids},
        )


class LockedEvent(EventEvaluationDomainException):
    """Exception raised when protected fields of a locked event are mutated."""

    def __init__(self, event_id: int, fields: Optional[Iterable[str]] = None):
        self.event_id = event_id
        self.fields: List[str] = sorted(fields) if fields else []
        message = f"Event {event_id} is locked"
        if self.fields:
            message += f"; cannot modify: {', '.join(self.fields)}"
        super().__init__(message, details={"event_id": event_id, "fields": self.fields})


class InvalidReference(EventEvaluationDomainException):
    """Exception raised when a criterion kind does not match the event mode."""

    def __init__(
        self,
        message: str,
        ids: Optional[Iterable[Any]] = None,
        missing_ids: Optional[Iterable[Any]] = None,
    ):
        self.ids: List[Any] = list(ids) if ids else []
        self.missing_ids: List[Any] = list(missing_ids) if missing_ids else []
        super().__init__(message, details={"ids": self.ids, "missing_ids": self.missing_ids})


class Conflict(EventEvaluationDomainException):
    """Exception raised when a guarded write would clobber existing state."""

    pass


class StaleWrite(EventEvaluationDomainException):
    """Exception raised when an optimistic version check fails."""

    def __init__(
        self, event_id: int, expected_version: int, actual_version: Optional[int] = None
    ):
        super().__init__(
            f"Event {event_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            details={
                "event_id": event_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
        self.event_id = event_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class ValidationError(EventEvaluationDomainException):
    """Exception raised when command input is malformed."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.field_name = field_name
