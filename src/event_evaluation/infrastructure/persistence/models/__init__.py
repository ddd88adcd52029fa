"""Database models for all domain entities."""

from .directory_models import (
    EVALUATOR_ROLE,
    GroupMembershipModel,
    GroupModel,
    MetricModel,
    SkillModel,
    SubjectModel,
    TeamModel,
    UserModel,
)
from .event_models import (
    EvaluationResultModel,
    EvaluatorAssignmentModel,
    EventModel,
    event_metrics,
    event_skills,
    event_subjects,
)

__all__ = [
    # Event models
    "EventModel",
    "EvaluatorAssignmentModel",
    "EvaluationResultModel",
    "event_subjects",
    "event_skills",
    "event_metrics",
    # Directory models
    "EVALUATOR_ROLE",
    "GroupModel",
    "TeamModel",
    "SubjectModel",
    "UserModel",
    "GroupMembershipModel",
    "SkillModel",
    "MetricModel",
]
