"""Resolution of ids against the roster, catalog and identity readers."""

import logging
from typing import List, Optional

from ...domain.event_management.exceptions import InvalidReference, NotFound
from ...domain.event_management.value_objects.event_mode import EventMode
from ..interfaces.directory_readers import (
    CatalogReader,
    IdentityReader,
    IdentityRecord,
    RosterReader,
    SubjectRecord,
    TeamRecord,
)

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Validate referenced ids before any write happens.

    Every ``require_*`` method raises :class:`NotFound` listing all missing ids
    rather than stopping at the first one.
    """

    def __init__(self, roster: RosterReader, catalog: CatalogReader, identities: IdentityReader):
        self.roster = roster
        self.catalog = catalog
        self.identities = identities

    async def require_group(self, group_id: int) -> None:
        if not await self.roster.group_exists(group_id):
            raise NotFound("Group", [group_id])

    async def require_team(self, group_id: int, team_id: Optional[int]) -> Optional[TeamRecord]:
        if team_id is None:
            return None
        team = await self.roster.find_team(group_id, team_id)
        if team is None:
            raise NotFound("Team", [team_id])
        return team

    async def require_subjects(self, group_id: int, ids: List[int]) -> List[SubjectRecord]:
        ids = _dedupe(ids)
        if not ids:
            return []
        subjects = await self.roster.find_subjects_by_ids(group_id, ids)
        _raise_missing("Subject", ids, [s.id for s in subjects])
        return subjects

    async def require_identities(self, ids: List[int]) -> List[IdentityRecord]:
        ids = _dedupe(ids)
        if not ids:
            return []
        found = await self.identities.find_identities_by_ids(ids)
        _raise_missing("Evaluator", ids, [i.id for i in found])
        return found

    async def evaluator_role_members(self, group_id: int) -> List[int]:
        members = await self.roster.find_evaluator_role_members(group_id)
        return _dedupe(m.id for m in members)

    async def require_criteria(self, group_id: int, mode: EventMode, ids: List[int]) -> List[int]:
        """Check every id is a criterion of the mode's kind owned by the group's catalog.

        Ids that resolve only as the other kind raise :class:`InvalidReference`;
        anything else unresolved raises :class:`NotFound`.
        """
        ids = _dedupe(ids)
        if not ids:
            return []

        if mode is EventMode.STANDARD_EVALUATION:
            found = {s.id for s in await self.catalog.find_skills_by_ids(group_id, ids)}
        else:
            found = await self._group_metric_ids(group_id, ids)

        missing = [i for i in ids if i not in found]
        if not missing:
            return ids

        if mode is EventMode.STANDARD_EVALUATION:
            wrong_kind = await self._group_metric_ids(group_id, missing)
        else:
            wrong_kind = {s.id for s in await self.catalog.find_skills_by_ids(group_id, missing)}

        if wrong_kind:
            wrong = [i for i in missing if i in wrong_kind]
            unknown = [i for i in missing if i not in wrong_kind]
            logger.warning(f"Criterion kind mismatch for {mode.value} event: {wrong}")
            message = (
                f"{mode.value} events score {mode.criterion_kind}s; "
                f"ids {', '.join(str(i) for i in wrong)} are not {mode.criterion_kind}s"
            )
            if unknown:
                message += f"; ids {', '.join(str(i) for i in unknown)} not found"
            raise InvalidReference(message, ids=wrong, missing_ids=unknown)
        raise NotFound(mode.criterion_kind.capitalize(), missing)

    async def _group_metric_ids(self, group_id: int, ids: List[int]) -> set:
        metrics = await self.catalog.find_metrics_by_ids(ids)
        return {m.id for m in metrics if m.group_id == group_id}


def _dedupe(ids) -> List[int]:
    return list(dict.fromkeys(ids))


def _raise_missing(resource: str, requested: List[int], found: List[int]) -> None:
    found_set = set(found)
    missing = [i for i in requested if i not in found_set]
    if missing:
        raise NotFound(resource, missing)
