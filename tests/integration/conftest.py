"""Integration test fixtures backed by a file-based SQLite database."""

import pytest_asyncio

from event_evaluation.infrastructure.config import EventSettings
from event_evaluation.infrastructure.container import Container
from event_evaluation.infrastructure.messaging.logging_event_publisher import (
    LoggingDomainEventPublisher,
)
from event_evaluation.infrastructure.persistence.database import DatabaseConfig, DatabaseManager
from event_evaluation.infrastructure.persistence.models import (
    EVALUATOR_ROLE,
    GroupMembershipModel,
    GroupModel,
    MetricModel,
    SkillModel,
    SubjectModel,
    TeamModel,
    UserModel,
)


async def _seed_directory(manager: DatabaseManager) -> None:
    """Two groups with their rosters, catalogs and evaluator memberships."""
    async with manager.get_session() as session:
        session.add_all(
            [
                GroupModel(id=1, name="Riverside FC"),
                GroupModel(id=2, name="Hillview FC"),
                TeamModel(id=1, group_id=1, name="U18"),
                TeamModel(id=2, group_id=2, name="U16"),
                SubjectModel(id=1, group_id=1, first_name="Ana", last_name="Silva"),
                SubjectModel(id=2, group_id=1, first_name="Ben", last_name="Okafor"),
                SubjectModel(id=4, group_id=1, first_name="Cleo", last_name="Marsh"),
                SubjectModel(id=3, group_id=2, first_name="Dev", last_name="Patel"),
                UserModel(id=100, email="coach.one@example.com", first_name="Coach", last_name="One"),
                UserModel(id=101, email="coach.two@example.com", first_name="Coach", last_name="Two"),
                UserModel(id=102, email="scout@example.com", first_name="Scout", last_name="Three"),
                GroupMembershipModel(group_id=1, user_id=100, role=EVALUATOR_ROLE),
                GroupMembershipModel(group_id=1, user_id=101, role=EVALUATOR_ROLE),
                GroupMembershipModel(group_id=1, user_id=102, role="Coach"),
                GroupMembershipModel(group_id=2, user_id=102, role=EVALUATOR_ROLE),
                SkillModel(id=10, group_id=1, name="Passing"),
                SkillModel(id=11, group_id=1, name="Shooting"),
                SkillModel(id=20, group_id=2, name="Tackling"),
                MetricModel(id=30, skill_id=10, name="Pass accuracy"),
                MetricModel(id=31, skill_id=11, name="Shots on target"),
                MetricModel(id=40, skill_id=20, name="Tackles won"),
            ]
        )
        await session.commit()


@pytest_asyncio.fixture
async def database_manager(tmp_path):
    """Create test database manager with schema and directory data."""
    config = DatabaseConfig(database_url=f"sqlite+aiosqlite:///{tmp_path / 'events.db'}")
    manager = DatabaseManager(config)
    await manager.create_schema()
    await _seed_directory(manager)

    yield manager

    await manager.close()


@pytest_asyncio.fixture
async def container(database_manager):
    """Wire use cases and services over the test database."""
    return Container(database_manager, EventSettings(), LoggingDomainEventPublisher())
