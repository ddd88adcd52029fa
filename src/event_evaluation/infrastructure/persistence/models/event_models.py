"""Database models for Event Management domain."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ....domain.event_management.value_objects.evaluator_status import EvaluatorStatus
from ....domain.event_management.value_objects.event_mode import EventMode
from ..database import Base

event_subjects = Table(
    "event_subjects",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("subject_id", Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
)

event_skills = Table(
    "event_skills",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)

event_metrics = Table(
    "event_metrics",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("metric_id", Integer, ForeignKey("metrics.id", ondelete="CASCADE"), primary_key=True),
)


class EventModel(Base):
    """Evaluation event aggregate root database model."""

    __tablename__ = "events"

    # Primary fields
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)
    mode = Column(Enum(EventMode), nullable=False, default=EventMode.STANDARD_EVALUATION)
    starts_at = Column(DateTime, nullable=False)
    ends_at = Column(DateTime, nullable=False)

    # Flags
    hide_subject_names = Column(Boolean, nullable=False, default=False)
    hide_preferred_positions = Column(Boolean, nullable=False, default=False)
    send_invites = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    locked = Column(Boolean, nullable=False, default=False)

    # Optimistic concurrency
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    assignments = relationship(
        "EvaluatorAssignmentModel",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EvaluatorAssignmentModel.id",
    )

    # Indexes for performance
    __table_args__ = (
        Index("ix_events_group_id", "group_id"),
        Index("ix_events_group_starts", "group_id", "starts_at"),
        Index("ix_events_team_id", "team_id"),
    )

    def __repr__(self) -> str:
        return f"<EventModel(id={self.id}, name='{self.name}', mode={self.mode})>"


class EvaluatorAssignmentModel(Base):
    """Evaluator assignment database model."""

    __tablename__ = "evaluator_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    evaluator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(Enum(EvaluatorStatus), nullable=False, default=EvaluatorStatus.INVITED)
    invitation_sent_at = Column(DateTime, nullable=True)
    accepted_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    event = relationship("EventModel", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("event_id", "evaluator_id"),
        Index("ix_evaluator_assignments_evaluator_id", "evaluator_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<EvaluatorAssignmentModel(event_id={self.event_id}, "
            f"evaluator_id={self.evaluator_id}, status={self.status})>"
        )


class EvaluationResultModel(Base):
    """Evaluation result database model.

    ``criterion_id`` points at a skill or a metric depending on the event mode,
    so it carries no foreign key.
    """

    __tablename__ = "evaluation_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    evaluator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    criterion_id = Column(Integer, nullable=False)

    score = Column(Numeric(10, 4), nullable=True)
    comment = Column(Text, nullable=True)
    choice_value = Column(Integer, nullable=True)
    attempt_number = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("event_id", "subject_id", "evaluator_id", "criterion_id"),
        Index("ix_evaluation_results_event_evaluator", "event_id", "evaluator_id"),
        Index("ix_evaluation_results_event_subject", "event_id", "subject_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<EvaluationResultModel(id={self.id}, event_id={self.event_id}, "
            f"subject_id={self.subject_id}, criterion_id={self.criterion_id})>"
        )
