"""Read-only ports onto the roster, catalog and identity systems."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class TeamRecord:
    id: int
    group_id: int
    name: str


@dataclass(frozen=True)
class SubjectRecord:
    id: int
    group_id: int
    first_name: str = ""
    last_name: str = ""


@dataclass(frozen=True)
class IdentityRecord:
    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class SkillRecord:
    id: int
    group_id: int
    name: str = ""


@dataclass(frozen=True)
class MetricRecord:
    """Metric entry; ``group_id`` is the group owning the catalog it lives in."""

    id: int
    group_id: int
    name: str = ""
    skill_id: Optional[int] = None


class RosterReader(ABC):
    """Resolve groups, teams, subjects and role membership."""

    @abstractmethod
    async def group_exists(self, group_id: int) -> bool:
        pass

    @abstractmethod
    async def find_team(self, group_id: int, team_id: int) -> Optional[TeamRecord]:
        """Find a team owned by the group."""
        pass

    @abstractmethod
    async def find_subjects_by_ids(self, group_id: int, ids: List[int]) -> List[SubjectRecord]:
        """Find the subjects among ``ids`` that are roster members of the group."""
        pass

    @abstractmethod
    async def find_evaluator_role_members(self, group_id: int) -> List[IdentityRecord]:
        """Current members of the group holding the Evaluator role."""
        pass


class CatalogReader(ABC):
    """Resolve skills and metrics of group catalogs."""

    @abstractmethod
    async def find_skills_by_ids(self, group_id: int, ids: List[int]) -> List[SkillRecord]:
        """Find the skills among ``ids`` owned by the group's catalog."""
        pass

    @abstractmethod
    async def find_metrics_by_ids(self, ids: List[int]) -> List[MetricRecord]:
        """Find metrics by id across catalogs."""
        pass


class IdentityReader(ABC):
    """Resolve user identities."""

    @abstractmethod
    async def find_identities_by_ids(self, ids: List[int]) -> List[IdentityRecord]:
        pass
