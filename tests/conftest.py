"""Global test configuration and fixtures."""

import logging
from unittest.mock import AsyncMock

import pytest

from event_evaluation.application.services.criteria_assignment_service import (
    CriteriaAssignmentService,
)
from event_evaluation.application.services.evaluator_assignment_service import (
    EvaluatorAssignmentService,
)
from event_evaluation.application.services.subject_assignment_service import (
    SubjectAssignmentService,
)

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_uow():
    """Mock unit of work."""
    uow = AsyncMock()
    uow.events = AsyncMock()
    uow.results = AsyncMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    return uow


@pytest.fixture
def mock_event_publisher():
    """Mock domain event publisher."""
    return AsyncMock()


@pytest.fixture
def mock_resolver():
    """Mock reference resolver that accepts every reference."""
    resolver = AsyncMock()
    resolver.evaluator_role_members.return_value = []
    return resolver


@pytest.fixture
def evaluator_service(mock_uow, mock_resolver, mock_event_publisher):
    return EvaluatorAssignmentService(mock_uow, mock_resolver, mock_event_publisher)


@pytest.fixture
def criteria_service(mock_uow, mock_resolver):
    return CriteriaAssignmentService(mock_uow, mock_resolver)


@pytest.fixture
def subject_service(mock_uow, mock_resolver):
    return SubjectAssignmentService(mock_uow, mock_resolver)
