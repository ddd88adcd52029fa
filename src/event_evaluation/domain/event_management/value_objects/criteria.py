"""Criteria value objects for Event Management domain.

An event scores either skills or metrics, never both. The two shapes are
separate types keyed by :class:`EventMode`, so a mixed set cannot be built.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from ..exceptions import InvalidReference
from .event_mode import EventMode


def _unique(ids: Iterable[int]) -> Tuple[int, ...]:
    seen = {}
    for criterion_id in ids:
        seen.setdefault(criterion_id, None)
    return tuple(seen)


@dataclass(frozen=True)
class SkillCriteria:
    """Skills scored by a StandardEvaluation event."""

    ids: Tuple[int, ...] = ()

    mode = EventMode.STANDARD_EVALUATION

    def __post_init__(self):
        object.__setattr__(self, "ids", _unique(self.ids))

    @property
    def kind(self) -> str:
        return "skill"

    def replace(self, ids: Iterable[int]) -> "SkillCriteria":
        return SkillCriteria(tuple(ids))

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, criterion_id: object) -> bool:
        return criterion_id in self.ids


@dataclass(frozen=True)
class MetricCriteria:
    """Metrics scored by a SelfAssessment event."""

    ids: Tuple[int, ...] = ()

    mode = EventMode.SELF_ASSESSMENT

    def __post_init__(self):
        object.__setattr__(self, "ids", _unique(self.ids))

    @property
    def kind(self) -> str:
        return "metric"

    def replace(self, ids: Iterable[int]) -> "MetricCriteria":
        return MetricCriteria(tuple(ids))

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, criterion_id: object) -> bool:
        return criterion_id in self.ids


Criteria = Union[SkillCriteria, MetricCriteria]


def criteria_for_mode(mode: EventMode, ids: Iterable[int] = ()) -> Criteria:
    """Build the criteria shape that matches an event mode."""
    if mode is EventMode.STANDARD_EVALUATION:
        return SkillCriteria(tuple(ids))
    if mode is EventMode.SELF_ASSESSMENT:
        return MetricCriteria(tuple(ids))
    raise InvalidReference(f"Unsupported event mode: {mode}")
