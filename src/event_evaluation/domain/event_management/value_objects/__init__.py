"""Event Management value objects."""

from .criteria import Criteria, MetricCriteria, SkillCriteria, criteria_for_mode
from .evaluator_progress import EvaluatorProgress
from .evaluator_status import EvaluatorStatus
from .event_mode import EventMode
from .lock_scope import LockScope
from .sync_result import SyncResult

__all__ = [
    "Criteria",
    "SkillCriteria",
    "MetricCriteria",
    "criteria_for_mode",
    "EvaluatorProgress",
    "EvaluatorStatus",
    "EventMode",
    "LockScope",
    "SyncResult",
]
