"""Application ports."""

from .directory_readers import (
    CatalogReader,
    IdentityReader,
    IdentityRecord,
    MetricRecord,
    RosterReader,
    SkillRecord,
    SubjectRecord,
    TeamRecord,
)
from .domain_event_publisher import DomainEventPublisher
from .unit_of_work import UnitOfWork

__all__ = [
    "CatalogReader",
    "IdentityReader",
    "RosterReader",
    "IdentityRecord",
    "MetricRecord",
    "SkillRecord",
    "SubjectRecord",
    "TeamRecord",
    "DomainEventPublisher",
    "UnitOfWork",
]
