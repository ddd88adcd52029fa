"""SQL readers for roster, catalog and identity data."""

from typing import List, Optional

from sqlalchemy import select

from ....application.interfaces.directory_readers import (
    CatalogReader,
    IdentityReader,
    IdentityRecord,
    MetricRecord,
    RosterReader,
    SkillRecord,
    SubjectRecord,
    TeamRecord,
)
from ..database import SessionFactory
from ..models.directory_models import (
    EVALUATOR_ROLE,
    GroupMembershipModel,
    GroupModel,
    MetricModel,
    SkillModel,
    SubjectModel,
    TeamModel,
    UserModel,
)


def _identity(model: UserModel) -> IdentityRecord:
    return IdentityRecord(
        id=model.id,
        email=model.email,
        first_name=model.first_name,
        last_name=model.last_name,
    )


class SqlRosterReader(RosterReader):
    """Roster reader backed by the groups, teams, subjects and membership tables."""

    def __init__(self, session_factory: SessionFactory, evaluator_role: str = EVALUATOR_ROLE):
        self.session_factory = session_factory
        self.evaluator_role = evaluator_role

    async def group_exists(self, group_id: int) -> bool:
        async with self.session_factory() as session:
            found = await session.scalar(select(GroupModel.id).where(GroupModel.id == group_id))
            return found is not None

    async def find_team(self, group_id: int, team_id: int) -> Optional[TeamRecord]:
        async with self.session_factory() as session:
            query = select(TeamModel).where(TeamModel.id == team_id, TeamModel.group_id == group_id)
            team = (await session.execute(query)).scalar_one_or_none()
            if team is None:
                return None
            return TeamRecord(id=team.id, group_id=team.group_id, name=team.name)

    async def find_subjects_by_ids(self, group_id: int, ids: List[int]) -> List[SubjectRecord]:
        if not ids:
            return []
        async with self.session_factory() as session:
            query = select(SubjectModel).where(
                SubjectModel.group_id == group_id, SubjectModel.id.in_(ids)
            )
            result = await session.execute(query)
            return [
                SubjectRecord(
                    id=s.id, group_id=s.group_id, first_name=s.first_name, last_name=s.last_name
                )
                for s in result.scalars().all()
            ]

    async def find_evaluator_role_members(self, group_id: int) -> List[IdentityRecord]:
        async with self.session_factory() as session:
            query = (
                select(UserModel)
                .join(GroupMembershipModel, GroupMembershipModel.user_id == UserModel.id)
                .where(
                    GroupMembershipModel.group_id == group_id,
                    GroupMembershipModel.role == self.evaluator_role,
                )
                .order_by(UserModel.id)
                .distinct()
            )
            result = await session.execute(query)
            return [_identity(user) for user in result.scalars().all()]


class SqlCatalogReader(CatalogReader):
    """Catalog reader backed by the skills and metrics tables."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def find_skills_by_ids(self, group_id: int, ids: List[int]) -> List[SkillRecord]:
        if not ids:
            return []
        async with self.session_factory() as session:
            query = select(SkillModel).where(SkillModel.group_id == group_id, SkillModel.id.in_(ids))
            result = await session.execute(query)
            return [
                SkillRecord(id=s.id, group_id=s.group_id, name=s.name)
                for s in result.scalars().all()
            ]

    async def find_metrics_by_ids(self, ids: List[int]) -> List[MetricRecord]:
        if not ids:
            return []
        async with self.session_factory() as session:
            query = (
                select(MetricModel.id, MetricModel.name, MetricModel.skill_id, SkillModel.group_id)
                .join(SkillModel, SkillModel.id == MetricModel.skill_id)
                .where(MetricModel.id.in_(ids))
            )
            result = await session.execute(query)
            return [
                MetricRecord(id=metric_id, group_id=group_id, name=name, skill_id=skill_id)
                for metric_id, name, skill_id, group_id in result.all()
            ]


class SqlIdentityReader(IdentityReader):
    """Identity reader backed by the users table."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def find_identities_by_ids(self, ids: List[int]) -> List[IdentityRecord]:
        if not ids:
            return []
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id.in_(ids)))
            return [_identity(user) for user in result.scalars().all()]
