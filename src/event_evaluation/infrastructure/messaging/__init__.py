"""Domain event publishing adapters."""

from .logging_event_publisher import LoggingDomainEventPublisher

__all__ = ["LoggingDomainEventPublisher"]
