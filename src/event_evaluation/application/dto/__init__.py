"""Application DTOs."""

from .event_dto import CreateEventCommandDTO, EvaluationRowDTO, EventPatchDTO

__all__ = ["CreateEventCommandDTO", "EventPatchDTO", "EvaluationRowDTO"]
