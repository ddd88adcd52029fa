"""Database models for the directory data events refer to.

Groups, teams, subjects, identities and the skill/metric catalog are owned by
other parts of the platform; they are mapped here so events can reference and
validate them.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base

EVALUATOR_ROLE = "Evaluator"


class GroupModel(Base):
    """Group (club, organisation) that owns events, teams, subjects and catalog."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    teams = relationship("TeamModel", back_populates="group", lazy="select")

    def __repr__(self) -> str:
        return f"<GroupModel(id={self.id}, name='{self.name}')>"


class TeamModel(Base):
    """Team within a group."""

    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)

    group = relationship("GroupModel", back_populates="teams")

    __table_args__ = (Index("ix_teams_group_id", "group_id"),)


class SubjectModel(Base):
    """Person being evaluated."""

    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")

    __table_args__ = (Index("ix_subjects_group_id", "group_id"),)


class UserModel(Base):
    """Authenticated identity that can act as an evaluator."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")


class GroupMembershipModel(Base):
    """Role an identity holds in a group."""

    __tablename__ = "group_memberships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(64), nullable=False)

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", "role"),
        Index("ix_group_memberships_group_role", "group_id", "role"),
    )


class SkillModel(Base):
    """Catalog skill owned by a group."""

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)

    metrics = relationship("MetricModel", back_populates="skill", lazy="select")

    __table_args__ = (Index("ix_skills_group_id", "group_id"),)


class MetricModel(Base):
    """Measurable metric belonging to a skill."""

    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)

    skill = relationship("SkillModel", back_populates="metrics")

    __table_args__ = (Index("ix_metrics_skill_id", "skill_id"),)
