"""Unit tests for ReferenceResolver."""

from unittest.mock import AsyncMock

import pytest

from event_evaluation.application.interfaces.directory_readers import (
    IdentityRecord,
    MetricRecord,
    SkillRecord,
    SubjectRecord,
    TeamRecord,
)
from event_evaluation.application.services.reference_resolver import ReferenceResolver
from event_evaluation.domain.event_management.exceptions import InvalidReference, NotFound
from event_evaluation.domain.event_management.value_objects.event_mode import EventMode


class TestReferenceResolver:
    """Unit tests for ReferenceResolver."""

    @pytest.fixture
    def roster(self):
        return AsyncMock()

    @pytest.fixture
    def catalog(self):
        catalog = AsyncMock()
        catalog.find_skills_by_ids.return_value = []
        catalog.find_metrics_by_ids.return_value = []
        return catalog

    @pytest.fixture
    def identities(self):
        return AsyncMock()

    @pytest.fixture
    def resolver(self, roster, catalog, identities):
        return ReferenceResolver(roster, catalog, identities)

    @pytest.mark.asyncio
    async def test_missing_group(self, resolver, roster):
        roster.group_exists.return_value = False

        with pytest.raises(NotFound) as exc_info:
            await resolver.require_group(1)
        assert exc_info.value.resource == "Group"

    @pytest.mark.asyncio
    async def test_team_of_other_group(self, resolver, roster):
        roster.find_team.return_value = None

        with pytest.raises(NotFound):
            await resolver.require_team(1, 7)
        assert await resolver.require_team(1, None) is None

    @pytest.mark.asyncio
    async def test_team_found(self, resolver, roster):
        roster.find_team.return_value = TeamRecord(id=7, group_id=1, name="U18")

        team = await resolver.require_team(1, 7)

        assert team.name == "U18"

    @pytest.mark.asyncio
    async def test_subjects_report_every_missing_id(self, resolver, roster):
        roster.find_subjects_by_ids.return_value = [SubjectRecord(id=1, group_id=1)]

        with pytest.raises(NotFound) as exc_info:
            await resolver.require_subjects(1, [1, 3, 4, 3])
        assert exc_info.value.missing_ids == [3, 4]

    @pytest.mark.asyncio
    async def test_empty_lists_skip_lookups(self, resolver, roster, identities, catalog):
        assert await resolver.require_subjects(1, []) == []
        assert await resolver.require_identities([]) == []
        assert await resolver.require_criteria(1, EventMode.STANDARD_EVALUATION, []) == []
        roster.find_subjects_by_ids.assert_not_awaited()
        identities.find_identities_by_ids.assert_not_awaited()
        catalog.find_skills_by_ids.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_identity(self, resolver, identities):
        identities.find_identities_by_ids.return_value = [IdentityRecord(id=100)]

        with pytest.raises(NotFound) as exc_info:
            await resolver.require_identities([100, 555])
        assert exc_info.value.resource == "Evaluator"
        assert exc_info.value.missing_ids == [555]

    @pytest.mark.asyncio
    async def test_skills_resolved(self, resolver, catalog):
        catalog.find_skills_by_ids.return_value = [
            SkillRecord(id=10, group_id=1),
            SkillRecord(id=11, group_id=1),
        ]

        ids = await resolver.require_criteria(1, EventMode.STANDARD_EVALUATION, [10, 11])

        assert ids == [10, 11]
        catalog.find_skills_by_ids.assert_awaited_once_with(1, [10, 11])

    @pytest.mark.asyncio
    async def test_skill_of_other_group_not_found(self, resolver, catalog):
        catalog.find_skills_by_ids.return_value = []

        with pytest.raises(NotFound) as exc_info:
            await resolver.require_criteria(1, EventMode.STANDARD_EVALUATION, [20])
        assert exc_info.value.resource == "Skill"
        assert exc_info.value.missing_ids == [20]

    @pytest.mark.asyncio
    async def test_metric_where_skill_expected(self, resolver, catalog):
        catalog.find_metrics_by_ids.return_value = [MetricRecord(id=30, group_id=1)]

        with pytest.raises(InvalidReference) as exc_info:
            await resolver.require_criteria(1, EventMode.STANDARD_EVALUATION, [30])
        assert exc_info.value.ids == [30]
        assert exc_info.value.missing_ids == []

    @pytest.mark.asyncio
    async def test_wrong_kind_mixed_with_unknown_ids(self, resolver, catalog):
        catalog.find_metrics_by_ids.return_value = [MetricRecord(id=30, group_id=1)]

        with pytest.raises(InvalidReference) as exc_info:
            await resolver.require_criteria(1, EventMode.STANDARD_EVALUATION, [30, 9999])

        assert exc_info.value.ids == [30]
        assert exc_info.value.missing_ids == [9999]
        assert exc_info.value.details["missing_ids"] == [9999]
        assert "9999" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_metrics_filtered_by_group(self, resolver, catalog):
        catalog.find_metrics_by_ids.return_value = [
            MetricRecord(id=30, group_id=1),
            MetricRecord(id=31, group_id=2),
        ]

        with pytest.raises(NotFound) as exc_info:
            await resolver.require_criteria(1, EventMode.SELF_ASSESSMENT, [30, 31])
        assert exc_info.value.resource == "Metric"
        assert exc_info.value.missing_ids == [31]

    @pytest.mark.asyncio
    async def test_evaluator_role_members(self, resolver, roster):
        roster.find_evaluator_role_members.return_value = [
            IdentityRecord(id=100),
            IdentityRecord(id=101),
            IdentityRecord(id=100),
        ]

        assert await resolver.evaluator_role_members(1) == [100, 101]
