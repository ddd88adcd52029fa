"""Unit tests for evaluator, criteria and subject assignment services."""

import pytest

from event_evaluation.domain.event_management.exceptions import (
    LockedEvent,
    NotFound,
    StaleWrite,
)
from event_evaluation.domain.event_management.value_objects.evaluator_status import (
    EvaluatorStatus,
)
from tests.factories import EventFactory


class TestEvaluatorAssignmentService:
    """Unit tests for EvaluatorAssignmentService."""

    @pytest.mark.asyncio
    async def test_sync_twice_is_idempotent(self, evaluator_service, mock_uow):
        event = EventFactory(id=1, evaluator_ids=(100,))
        mock_uow.events.find_by_id.return_value = event

        first = await evaluator_service.sync_evaluators(1, [100, 101])
        second = await evaluator_service.sync_evaluators(1, [100, 101])

        assert first.added == [101]
        assert second.added == []
        assert second.removed == []
        assert second.kept == [100, 101]
        mock_uow.events.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sync_validates_only_added_identities(
        self, evaluator_service, mock_uow, mock_resolver
    ):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, evaluator_ids=(100, 101))

        result = await evaluator_service.sync_evaluators(1, [101, 102])

        assert result.removed == [100]
        mock_resolver.require_identities.assert_awaited_once_with([102])

    @pytest.mark.asyncio
    async def test_sync_unknown_identity(self, evaluator_service, mock_uow, mock_resolver):
        event = EventFactory(id=1, evaluator_ids=(100,))
        mock_uow.events.find_by_id.return_value = event
        mock_resolver.require_identities.side_effect = NotFound("Evaluator", [555])

        with pytest.raises(NotFound):
            await evaluator_service.sync_evaluators(1, [100, 555])
        assert event.evaluator_ids == [100]
        mock_uow.events.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sync_locked_event(self, evaluator_service, mock_uow, mock_resolver):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, locked=True)

        with pytest.raises(LockedEvent):
            await evaluator_service.sync_evaluators(1, [100, 101])
        mock_resolver.require_identities.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sync_with_stale_version(self, evaluator_service, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, version=2)

        with pytest.raises(StaleWrite):
            await evaluator_service.sync_evaluators(1, [100, 101], expected_version=1)

    @pytest.mark.asyncio
    async def test_sync_publishes_invitations(
        self, evaluator_service, mock_uow, mock_event_publisher
    ):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, evaluator_ids=(100,))

        await evaluator_service.sync_evaluators(1, [100, 101])

        published = mock_event_publisher.publish_all.await_args.args[0]
        assert [e.evaluator_id for e in published] == [101]

    @pytest.mark.asyncio
    async def test_invite_evaluator(self, evaluator_service, mock_uow):
        event = EventFactory(id=1, evaluator_ids=(100,))
        mock_uow.events.find_by_id.return_value = event

        assignment = await evaluator_service.invite_evaluator(1, 101)

        assert assignment.evaluator_id == 101
        assert assignment.status == EvaluatorStatus.INVITED
        assert event.evaluator_ids == [100, 101]
        mock_uow.events.save.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_invite_existing_evaluator_returns_assignment(
        self, evaluator_service, mock_uow
    ):
        event = EventFactory(id=1, evaluator_ids=(100,))
        mock_uow.events.find_by_id.return_value = event

        assignment = await evaluator_service.invite_evaluator(1, 100)

        assert assignment is event.find_assignment(100)
        mock_uow.events.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_status_stamps_timestamp(self, evaluator_service, mock_uow):
        event = EventFactory(id=1, evaluator_ids=(100,))
        mock_uow.events.find_by_id.return_value = event

        assignment = await evaluator_service.update_status(1, 100, EvaluatorStatus.ACCEPTED)

        assert assignment.status == EvaluatorStatus.ACCEPTED
        assert assignment.accepted_at is not None
        mock_uow.events.save_assignment.assert_awaited_once_with(1, assignment)

    @pytest.mark.asyncio
    async def test_update_status_off_path_is_written(self, evaluator_service, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, evaluator_ids=(100,))

        assignment = await evaluator_service.update_status(1, 100, EvaluatorStatus.COMPLETED)

        assert assignment.status == EvaluatorStatus.COMPLETED
        assert assignment.completed_at is not None

    @pytest.mark.asyncio
    async def test_update_status_allowed_on_locked_event(self, evaluator_service, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(
            id=1, locked=True, evaluator_ids=(100,)
        )

        assignment = await evaluator_service.update_status(1, 100, EvaluatorStatus.DECLINED)

        assert assignment.status == EvaluatorStatus.DECLINED

    @pytest.mark.asyncio
    async def test_update_status_unknown_assignment(self, evaluator_service, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, evaluator_ids=(100,))

        with pytest.raises(NotFound):
            await evaluator_service.update_status(1, 555, EvaluatorStatus.ACCEPTED)


class TestCriteriaAssignmentService:
    """Unit tests for CriteriaAssignmentService."""

    @pytest.mark.asyncio
    async def test_empty_then_refill(self, criteria_service, mock_uow):
        event = EventFactory(id=1, criteria_ids=(10, 11))
        mock_uow.events.find_by_id.return_value = event

        cleared = await criteria_service.sync_criteria(1, [])
        refilled = await criteria_service.sync_criteria(1, [10, 11])

        assert cleared.removed == [10, 11]
        assert refilled.to_dict()["added"] == [10, 11]
        assert refilled.removed == []
        assert refilled.kept == []
        assert event.criteria.ids == (10, 11)

    @pytest.mark.asyncio
    async def test_locked_event(self, criteria_service, mock_uow, mock_resolver):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, locked=True)

        with pytest.raises(LockedEvent):
            await criteria_service.sync_criteria(1, [10])
        mock_resolver.require_criteria.assert_not_awaited()


class TestSubjectAssignmentService:
    """Unit tests for SubjectAssignmentService."""

    @pytest.mark.asyncio
    async def test_add_subjects(self, subject_service, mock_uow, mock_resolver):
        event = EventFactory(id=1, subject_ids=[1])
        mock_uow.events.find_by_id.return_value = event

        await subject_service.add_subjects(1, [1, 2])

        assert event.subject_ids == [1, 2]
        mock_resolver.require_subjects.assert_awaited_once_with(1, [1, 2])
        mock_uow.events.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_unknown_subjects_is_noop(self, subject_service, mock_uow):
        event = EventFactory(id=1, subject_ids=[1])
        mock_uow.events.find_by_id.return_value = event

        await subject_service.remove_subjects(1, [9])

        assert event.subject_ids == [1]
        mock_uow.events.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_locked_event(self, subject_service, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, locked=True)

        with pytest.raises(LockedEvent):
            await subject_service.remove_subjects(1, [1])
