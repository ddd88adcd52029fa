"""Integration tests running use cases against SQLite through aiosqlite."""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from event_evaluation.application.dto.event_dto import EvaluationRowDTO, EventPatchDTO
from event_evaluation.domain.event_management.exceptions import (
    Conflict,
    LockedEvent,
    NotFound,
    StaleWrite,
)
from event_evaluation.domain.event_management.repositories.evaluation_result_repository import (
    ResultFilters,
)
from event_evaluation.domain.event_management.repositories.event_repository import EventFilters
from event_evaluation.domain.event_management.value_objects.criteria import MetricCriteria
from event_evaluation.domain.event_management.value_objects.evaluator_status import (
    EvaluatorStatus,
)
from event_evaluation.domain.event_management.value_objects.event_mode import EventMode
from event_evaluation.infrastructure.persistence.models import (
    EvaluationResultModel,
    EvaluatorAssignmentModel,
    event_skills,
    event_subjects,
)
from tests.factories import CreateEventCommandDTOFactory

pytestmark = pytest.mark.integration


async def _create_event(container, **overrides):
    command = CreateEventCommandDTOFactory(**overrides)
    return await container.get_create_event_use_case().execute(1, command, creator_id=100)


async def _reload(container, event_id):
    return await container.get_event_use_case().execute(event_id)


class TestEventLifecycle:
    """Create, read, update and delete events."""

    @pytest.mark.asyncio
    async def test_create_and_reload(self, container):
        event = await _create_event(container, evaluator_ids=[100], team_id=1)

        loaded = await _reload(container, event.id)

        assert loaded.id == event.id
        assert loaded.mode is EventMode.STANDARD_EVALUATION
        assert loaded.subject_ids == [1, 2]
        assert loaded.criteria.ids == (10, 11)
        assert loaded.evaluator_ids == [100]
        assert loaded.assignments[0].id is not None
        assert loaded.assignments[0].status == EvaluatorStatus.INVITED
        assert loaded.assignments[0].invitation_sent_at is not None
        assert loaded.team_id == 1
        assert loaded.created_by_id == 100
        assert loaded.version == 1

    @pytest.mark.asyncio
    async def test_self_assessment_ignores_caller_evaluators(self, container):
        event = await _create_event(
            container,
            mode=EventMode.SELF_ASSESSMENT,
            criteria_ids=[30, 31],
            evaluator_ids=[999],
            hide_subject_names=True,
        )

        loaded = await _reload(container, event.id)

        assert loaded.evaluator_ids == [100, 101]
        assert isinstance(loaded.criteria, MetricCriteria)
        assert loaded.criteria.ids == (30, 31)
        assert loaded.hide_subject_names is False
        assert loaded.send_invites is True

    @pytest.mark.asyncio
    async def test_skill_of_other_group_not_found(self, container):
        with pytest.raises(NotFound) as exc_info:
            await _create_event(container, criteria_ids=[10, 20])

        assert exc_info.value.resource == "Skill"
        assert exc_info.value.missing_ids == [20]
        assert await container.get_list_group_events_use_case().execute(1) == []

    @pytest.mark.asyncio
    async def test_subject_of_other_group_not_found(self, container):
        with pytest.raises(NotFound) as exc_info:
            await _create_event(container, subject_ids=[1, 3])

        assert exc_info.value.missing_ids == [3]

    @pytest.mark.asyncio
    async def test_team_of_other_group_not_found(self, container):
        with pytest.raises(NotFound):
            await _create_event(container, team_id=2)

    @pytest.mark.asyncio
    async def test_partial_update(self, container):
        event = await _create_event(container, evaluator_ids=[100])

        await container.get_update_event_use_case().execute(
            1, event.id, EventPatchDTO(name="Renamed", subject_ids=[2, 4], expected_version=1)
        )
        loaded = await _reload(container, event.id)

        assert loaded.name == "Renamed"
        assert loaded.subject_ids == [2, 4]
        assert loaded.criteria.ids == (10, 11)
        assert loaded.evaluator_ids == [100]
        assert loaded.version == 2

    @pytest.mark.asyncio
    async def test_clear_team(self, container):
        event = await _create_event(container, team_id=1)

        await container.get_update_event_use_case().execute(
            1, event.id, EventPatchDTO(clear_team=True)
        )

        assert (await _reload(container, event.id)).team_id is None

    @pytest.mark.asyncio
    async def test_stale_expected_version(self, container):
        event = await _create_event(container)
        use_case = container.get_update_event_use_case()

        await use_case.execute(1, event.id, EventPatchDTO(name="First", expected_version=1))
        with pytest.raises(StaleWrite):
            await use_case.execute(1, event.id, EventPatchDTO(name="Second", expected_version=1))

        assert (await _reload(container, event.id)).name == "First"

    @pytest.mark.asyncio
    async def test_concurrent_save_detected(self, container):
        event = await _create_event(container)
        uow_a = container.new_unit_of_work()
        uow_b = container.new_unit_of_work()

        async with uow_a:
            event_a = await uow_a.events.find_by_id(event.id)

            async with uow_b:
                event_b = await uow_b.events.find_by_id(event.id)
                event_b.apply_scalar_changes({"name": "Written by B"})
                await uow_b.events.save(event_b)
                await uow_b.commit()

            event_a.apply_scalar_changes({"name": "Written by A"})
            with pytest.raises(StaleWrite):
                await uow_a.events.save(event_a)

        assert (await _reload(container, event.id)).name == "Written by B"

    @pytest.mark.asyncio
    async def test_list_group_events(self, container):
        early = await _create_event(container)
        late = await _create_event(
            container,
            mode=EventMode.SELF_ASSESSMENT,
            criteria_ids=[30],
            starts_at=early.starts_at + timedelta(days=7),
            ends_at=early.ends_at + timedelta(days=7),
        )
        use_case = container.get_list_group_events_use_case()

        everything = await use_case.execute(1)
        self_assessments = await use_case.execute(
            1, EventFilters(mode=EventMode.SELF_ASSESSMENT)
        )

        assert [e.id for e in everything] == [late.id, early.id]
        assert [e.id for e in self_assessments] == [late.id]
        assert await use_case.execute(2) == []

    @pytest.mark.asyncio
    async def test_delete_removes_owned_rows(self, container, database_manager):
        event = await _create_event(container, evaluator_ids=[100])
        await container.get_evaluation_result_service().submit(
            event.id, 100, [EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("5"))]
        )

        assert await container.get_delete_event_use_case().execute(event.id) is True

        with pytest.raises(NotFound):
            await _reload(container, event.id)
        async with database_manager.get_session() as session:
            for table in (
                EvaluationResultModel.__table__,
                EvaluatorAssignmentModel.__table__,
                event_subjects,
                event_skills,
            ):
                count = await session.scalar(
                    select(func.count()).select_from(table).where(table.c.event_id == event.id)
                )
                assert count == 0


class TestLockedEvents:
    """Mutations of locked events."""

    @pytest.mark.asyncio
    async def test_locked_event_rejects_structural_changes(self, container):
        event = await _create_event(container, evaluator_ids=[100])
        await container.get_set_event_lock_use_case().execute(event.id, True)

        with pytest.raises(LockedEvent):
            await container.get_update_event_use_case().execute(
                1, event.id, EventPatchDTO(subject_ids=[1])
            )
        with pytest.raises(LockedEvent):
            await container.get_evaluator_assignment_service().sync_evaluators(
                event.id, [100, 101]
            )
        with pytest.raises(LockedEvent):
            await container.get_criteria_assignment_service().sync_criteria(event.id, [10])
        with pytest.raises(LockedEvent):
            await container.get_delete_event_use_case().execute(event.id)

        loaded = await _reload(container, event.id)
        assert loaded.locked is True
        assert loaded.subject_ids == [1, 2]
        assert loaded.evaluator_ids == [100]

    @pytest.mark.asyncio
    async def test_unlock_then_delete(self, container):
        event = await _create_event(container)
        lock = container.get_set_event_lock_use_case()

        await lock.execute(event.id, True)
        await lock.execute(event.id, False)

        assert await container.get_delete_event_use_case().execute(event.id) is True

    @pytest.mark.asyncio
    async def test_status_edit_allowed_while_locked(self, container):
        event = await _create_event(container, evaluator_ids=[100])
        await container.get_set_event_lock_use_case().execute(event.id, True)

        await container.get_evaluator_assignment_service().update_status(
            event.id, 100, EvaluatorStatus.ACCEPTED
        )

        assignment = (await _reload(container, event.id)).find_assignment(100)
        assert assignment.status == EvaluatorStatus.ACCEPTED
        assert assignment.accepted_at is not None


class TestAssignments:
    """Evaluator, criteria and subject reconciliation."""

    @pytest.mark.asyncio
    async def test_sync_evaluators_twice(self, container):
        event = await _create_event(container, evaluator_ids=[100])

        first = await container.get_evaluator_assignment_service().sync_evaluators(
            event.id, [100, 101]
        )
        second = await container.get_evaluator_assignment_service().sync_evaluators(
            event.id, [100, 101]
        )

        assert first.added == [101]
        assert second.to_dict()["added"] == []
        assert second.removed == []
        assert sorted(second.kept) == [100, 101]
        assert (await _reload(container, event.id)).evaluator_ids == [100, 101]

    @pytest.mark.asyncio
    async def test_sync_evaluators_removes_rows(self, container):
        event = await _create_event(container, evaluator_ids=[100, 101])

        result = await container.get_evaluator_assignment_service().sync_evaluators(
            event.id, [101, 102]
        )

        assert result.added == [102]
        assert result.removed == [100]
        assert (await _reload(container, event.id)).evaluator_ids == [101, 102]

    @pytest.mark.asyncio
    async def test_sync_criteria_empty_then_refill(self, container):
        event = await _create_event(container)
        service = container.get_criteria_assignment_service()

        await service.sync_criteria(event.id, [])
        assert (await _reload(container, event.id)).criteria.ids == ()

        refilled = await service.sync_criteria(event.id, [10, 11])

        assert refilled.added == [10, 11]
        assert refilled.removed == []
        assert refilled.kept == []
        assert (await _reload(container, event.id)).criteria.ids == (10, 11)

    @pytest.mark.asyncio
    async def test_invite_evaluator(self, container):
        event = await _create_event(container, evaluator_ids=[100])

        assignment = await container.get_evaluator_assignment_service().invite_evaluator(
            event.id, 102
        )

        assert assignment.id is not None
        assert (await _reload(container, event.id)).evaluator_ids == [100, 102]

    @pytest.mark.asyncio
    async def test_add_and_remove_subjects(self, container):
        event = await _create_event(container)
        service = container.get_subject_assignment_service()

        await service.add_subjects(event.id, [4])
        with pytest.raises(NotFound):
            await service.add_subjects(event.id, [3])
        await service.remove_subjects(event.id, [1])

        assert (await _reload(container, event.id)).subject_ids == [2, 4]


class TestResultsAndProgress:
    """Result recording, notes and progress."""

    @pytest.mark.asyncio
    async def test_same_key_twice_keeps_one_row(self, container):
        event = await _create_event(container, evaluator_ids=[100])
        service = container.get_evaluation_result_service()

        await service.submit(
            event.id,
            100,
            [EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("6"), comment="first")],
        )
        await service.submit(
            event.id, 100, [EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("8.5"))]
        )

        results = await service.get_results(event.id)
        assert len(results) == 1
        assert results[0].score == Decimal("8.5")
        assert results[0].comment == "first"

    @pytest.mark.asyncio
    async def test_filters_compose(self, container):
        event = await _create_event(container, evaluator_ids=[100, 101])
        service = container.get_evaluation_result_service()
        rows = [
            EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("5")),
            EvaluationRowDTO(subject_id=2, criterion_id=10, score=Decimal("6")),
        ]
        await service.submit(event.id, 100, rows)
        await service.submit(event.id, 101, rows)

        results = await service.get_results(
            event.id, ResultFilters(subject_id=2, evaluator_id=101)
        )

        assert len(results) == 1
        assert results[0].score == Decimal("6")

    @pytest.mark.asyncio
    async def test_submission_by_unassigned_evaluator(self, container):
        event = await _create_event(container, evaluator_ids=[100])

        with pytest.raises(NotFound):
            await container.get_evaluation_result_service().submit(
                event.id, 102, [EvaluationRowDTO(subject_id=1, criterion_id=10)]
            )

    @pytest.mark.asyncio
    async def test_progress_one_of_four(self, container):
        event = await _create_event(
            container, subject_ids=[1, 2], criteria_ids=[10, 11], evaluator_ids=[100]
        )
        await container.get_evaluation_result_service().submit(
            event.id, 100, [EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("7"))]
        )

        progress = await container.get_progress_service().get_progress(event.id)

        assert [p.to_dict() for p in progress] == [
            {
                "evaluator": 100,
                "status": "INVITED",
                "progress": {"completed": 1, "total": 4, "percentage": 25.0},
            }
        ]

    @pytest.mark.asyncio
    async def test_notes(self, container):
        event = await _create_event(container, evaluator_ids=[100])
        service = container.get_evaluation_result_service()
        [result] = await service.submit(
            event.id, 100, [EvaluationRowDTO(subject_id=1, criterion_id=10, score=Decimal("7"))]
        )

        await service.add_note(event.id, result.id, 100, "Reads the game well")
        with pytest.raises(Conflict):
            await service.add_note(event.id, result.id, 100, "Second note")
        await service.update_note(event.id, result.id, 100, "Reads the game very well")
        with pytest.raises(NotFound):
            await service.add_note(event.id, result.id, 101, "Not my result")

        [stored] = await service.get_results(event.id)
        assert stored.note == "Reads the game very well"

        await service.delete_note(event.id, result.id, 100)
        [stored] = await service.get_results(event.id)
        assert stored.note == ""
        assert stored.score == Decimal("7")
