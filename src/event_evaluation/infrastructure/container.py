"""Dependency wiring for event evaluation."""

import logging
from typing import Optional

from ..application.interfaces.domain_event_publisher import DomainEventPublisher
from ..application.services.criteria_assignment_service import CriteriaAssignmentService
from ..application.services.evaluation_result_service import EvaluationResultService
from ..application.services.evaluator_assignment_service import EvaluatorAssignmentService
from ..application.services.progress_service import ProgressService
from ..application.services.reference_resolver import ReferenceResolver
from ..application.services.subject_assignment_service import SubjectAssignmentService
from ..application.use_cases.event_lifecycle import (
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    ListGroupEventsUseCase,
    SetEventLockUseCase,
    UpdateEventUseCase,
)
from .config import EventSettings
from .messaging.logging_event_publisher import LoggingDomainEventPublisher
from .persistence.database import DatabaseManager
from .persistence.repositories.directory_readers_impl import (
    SqlCatalogReader,
    SqlIdentityReader,
    SqlRosterReader,
)
from .persistence.unit_of_work import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class Container:
    """Builds use cases and services over one database.

    Readers, resolver and publisher are shared. Every getter returns objects
    bound to a fresh unit of work, so callers must not share them across
    concurrent tasks.
    """

    def __init__(
        self,
        database: DatabaseManager,
        settings: Optional[EventSettings] = None,
        event_publisher: Optional[DomainEventPublisher] = None,
    ):
        self.database = database
        self.settings = settings or EventSettings()
        self.event_publisher = event_publisher or LoggingDomainEventPublisher()
        self._resolver: Optional[ReferenceResolver] = None

    @property
    def resolver(self) -> ReferenceResolver:
        if self._resolver is None:
            logger.info("Wiring directory readers")
            session_factory = self.database.get_async_session_factory()
            self._resolver = ReferenceResolver(
                roster=SqlRosterReader(session_factory),
                catalog=SqlCatalogReader(session_factory),
                identities=SqlIdentityReader(session_factory),
            )
        return self._resolver

    def new_unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.database.get_async_session_factory())

    # Service getters
    def get_evaluator_assignment_service(
        self, uow: Optional[SqlAlchemyUnitOfWork] = None
    ) -> EvaluatorAssignmentService:
        return EvaluatorAssignmentService(
            uow or self.new_unit_of_work(), self.resolver, self.event_publisher
        )

    def get_criteria_assignment_service(
        self, uow: Optional[SqlAlchemyUnitOfWork] = None
    ) -> CriteriaAssignmentService:
        return CriteriaAssignmentService(uow or self.new_unit_of_work(), self.resolver)

    def get_subject_assignment_service(
        self, uow: Optional[SqlAlchemyUnitOfWork] = None
    ) -> SubjectAssignmentService:
        return SubjectAssignmentService(uow or self.new_unit_of_work(), self.resolver)

    def get_evaluation_result_service(self) -> EvaluationResultService:
        return EvaluationResultService(
            self.new_unit_of_work(), require_acceptance=self.settings.require_acceptance
        )

    def get_progress_service(self) -> ProgressService:
        return ProgressService(self.new_unit_of_work())

    # Use case getters
    def get_create_event_use_case(self) -> CreateEventUseCase:
        return CreateEventUseCase(self.new_unit_of_work(), self.resolver, self.event_publisher)

    def get_update_event_use_case(self) -> UpdateEventUseCase:
        # Relationship edits run inside the update's own transaction
        uow = self.new_unit_of_work()
        return UpdateEventUseCase(
            uow,
            self.resolver,
            evaluator_service=self.get_evaluator_assignment_service(uow),
            criteria_service=self.get_criteria_assignment_service(uow),
            subject_service=self.get_subject_assignment_service(uow),
            event_publisher=self.event_publisher,
            lock_scope=self.settings.lock_scope,
        )

    def get_delete_event_use_case(self) -> DeleteEventUseCase:
        return DeleteEventUseCase(self.new_unit_of_work())

    def get_set_event_lock_use_case(self) -> SetEventLockUseCase:
        return SetEventLockUseCase(self.new_unit_of_work(), self.event_publisher)

    def get_event_use_case(self) -> GetEventUseCase:
        return GetEventUseCase(self.new_unit_of_work())

    def get_list_group_events_use_case(self) -> ListGroupEventsUseCase:
        return ListGroupEventsUseCase(self.new_unit_of_work(), self.resolver)
