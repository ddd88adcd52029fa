"""Unit tests for lock, delete and read use cases."""

import pytest

from event_evaluation.application.use_cases.event_lifecycle import (
    DeleteEventUseCase,
    GetEventUseCase,
    ListGroupEventsUseCase,
    SetEventLockUseCase,
)
from event_evaluation.domain.event_management.events.event_events import (
    EvaluationEventLockChanged,
)
from event_evaluation.domain.event_management.exceptions import LockedEvent, NotFound
from event_evaluation.domain.event_management.repositories.event_repository import EventFilters
from tests.factories import EventFactory


class TestSetEventLockUseCase:
    """Unit tests for SetEventLockUseCase."""

    @pytest.mark.asyncio
    async def test_lock_event(self, mock_uow, mock_event_publisher):
        event = EventFactory(id=1)
        mock_uow.events.find_by_id.return_value = event

        result = await SetEventLockUseCase(mock_uow, mock_event_publisher).execute(1, True)

        assert result.locked is True
        mock_uow.events.save.assert_awaited_once_with(event)
        published = mock_event_publisher.publish_all.await_args.args[0]
        assert isinstance(published[0], EvaluationEventLockChanged)

    @pytest.mark.asyncio
    async def test_unlock_locked_event(self, mock_uow, mock_event_publisher):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, locked=True)

        result = await SetEventLockUseCase(mock_uow, mock_event_publisher).execute(1, False)

        assert result.locked is False

    @pytest.mark.asyncio
    async def test_missing_event(self, mock_uow, mock_event_publisher):
        mock_uow.events.find_by_id.return_value = None

        with pytest.raises(NotFound):
            await SetEventLockUseCase(mock_uow, mock_event_publisher).execute(1, True)


class TestDeleteEventUseCase:
    """Unit tests for DeleteEventUseCase."""

    @pytest.mark.asyncio
    async def test_delete_unlocked_event(self, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1)

        assert await DeleteEventUseCase(mock_uow).execute(1) is True
        mock_uow.events.delete.assert_awaited_once_with(1)
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_locked_event_rejected(self, mock_uow):
        mock_uow.events.find_by_id.return_value = EventFactory(id=1, locked=True)

        with pytest.raises(LockedEvent):
            await DeleteEventUseCase(mock_uow).execute(1)
        mock_uow.events.delete.assert_not_awaited()


class TestReadUseCases:
    """Unit tests for GetEventUseCase and ListGroupEventsUseCase."""

    @pytest.mark.asyncio
    async def test_get_event(self, mock_uow):
        event = EventFactory(id=3)
        mock_uow.events.find_by_id.return_value = event

        assert await GetEventUseCase(mock_uow).execute(3) is event

    @pytest.mark.asyncio
    async def test_list_group_events_passes_filters(self, mock_uow, mock_resolver):
        events = [EventFactory(id=1), EventFactory(id=2)]
        mock_uow.events.find_by_group.return_value = events
        filters = EventFilters(is_active=True)

        result = await ListGroupEventsUseCase(mock_uow, mock_resolver).execute(1, filters)

        assert result == events
        mock_resolver.require_group.assert_awaited_once_with(1)
        mock_uow.events.find_by_group.assert_awaited_once_with(1, filters)
