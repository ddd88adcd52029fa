"""Event repository implementation."""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ....domain.event_management.entities.evaluator_assignment import EvaluatorAssignment
from ....domain.event_management.entities.event import Event
from ....domain.event_management.exceptions import NotFound, StaleWrite
from ....domain.event_management.repositories.event_repository import (
    EventFilters,
    EventRepository,
)
from ....domain.event_management.value_objects.event_mode import EventMode
from ..models.event_models import (
    EvaluationResultModel,
    EvaluatorAssignmentModel,
    EventModel,
    event_metrics,
    event_skills,
    event_subjects,
)
from .mappers.event_mapper import EventMapper

# Link table and its foreign key column per criterion kind
CRITERIA_LINKS: Dict[str, Tuple[Table, str]] = {
    "skill": (event_skills, "skill_id"),
    "metric": (event_metrics, "metric_id"),
}

assignments_table = EvaluatorAssignmentModel.__table__


class EventRepositoryImpl(EventRepository):
    """SQLAlchemy implementation of EventRepository.

    Works inside the unit of work's session; commit and rollback belong to the
    unit of work.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.mapper = EventMapper()

    async def add(self, event: Event) -> None:
        """Insert event, link rows and assignments; assigns generated ids."""
        event_model = self.mapper.to_model(event)
        self.session.add(event_model)
        await self.session.flush()

        # Update the domain entity IDs now they are generated
        event.id = event_model.id
        for assignment, assignment_model in zip(event.assignments, event_model.assignments):
            assignment.id = assignment_model.id
            assignment.event_id = event_model.id

        await self._insert_links(event_subjects, "subject_id", event.id, event.subject_ids)
        table, column = CRITERIA_LINKS[event.mode.criterion_kind]
        await self._insert_links(table, column, event.id, event.criteria.ids)

    async def find_by_id(self, event_id: int) -> Optional[Event]:
        """Find event by ID with links and assignments."""
        query = select(EventModel).where(EventModel.id == event_id)
        result = await self.session.execute(query)
        event_model = result.scalar_one_or_none()

        if event_model is None:
            return None

        return (await self._to_domain([event_model]))[0]

    async def find_by_group(
        self, group_id: int, filters: Optional[EventFilters] = None
    ) -> List[Event]:
        """Find a group's events, newest start first."""
        query = select(EventModel).where(EventModel.group_id == group_id)

        if filters is not None:
            if filters.is_active is not None:
                query = query.where(EventModel.is_active == filters.is_active)
            if filters.mode is not None:
                query = query.where(EventModel.mode == filters.mode)
            if filters.team_id is not None:
                query = query.where(EventModel.team_id == filters.team_id)
            if filters.starts_after is not None:
                query = query.where(EventModel.starts_at >= filters.starts_after)
            if filters.ends_before is not None:
                query = query.where(EventModel.ends_at <= filters.ends_before)

        query = query.order_by(EventModel.starts_at.desc(), EventModel.id.desc())
        result = await self.session.execute(query)
        return await self._to_domain(list(result.scalars().all()))

    async def save(self, event: Event, expected_version: Optional[int] = None) -> None:
        """Write scalars under a version check, then reconcile link and assignment rows.

        Without an explicit ``expected_version`` the version the event was loaded
        with is used, so a concurrent write in between is still detected.
        """
        expected = expected_version if expected_version is not None else event.version

        query = (
            update(EventModel)
            .where(EventModel.id == event.id, EventModel.version == expected)
            .values(version=EventModel.version + 1, **self.mapper.scalar_values(event))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(query)

        if result.rowcount == 0:
            actual = await self.session.scalar(
                select(EventModel.version).where(EventModel.id == event.id)
            )
            if actual is None:
                raise NotFound("Event", [event.id])
            raise StaleWrite(event.id, expected, actual)

        event.version = expected + 1

        await self._sync_links(event_subjects, "subject_id", event.id, event.subject_ids)
        table, column = CRITERIA_LINKS[event.mode.criterion_kind]
        await self._sync_links(table, column, event.id, event.criteria.ids)
        await self._sync_assignments(event)

    async def save_assignment(self, event_id: int, assignment: EvaluatorAssignment) -> None:
        """Persist status and timestamps of one assignment."""
        query = (
            update(assignments_table)
            .where(
                assignments_table.c.event_id == event_id,
                assignments_table.c.evaluator_id == assignment.evaluator_id,
            )
            .values(**self.mapper.assignment_values(assignment))
        )
        await self.session.execute(query)

    async def delete(self, event_id: int) -> None:
        """Delete event with its results, assignments and link rows."""
        # Explicit so that backends without enforced foreign keys stay clean
        await self.session.execute(
            delete(EvaluationResultModel.__table__).where(
                EvaluationResultModel.__table__.c.event_id == event_id
            )
        )
        await self.session.execute(
            delete(assignments_table).where(assignments_table.c.event_id == event_id)
        )
        for table in (event_subjects, event_skills, event_metrics):
            await self.session.execute(delete(table).where(table.c.event_id == event_id))
        await self.session.execute(
            delete(EventModel.__table__).where(EventModel.__table__.c.id == event_id)
        )

    async def _to_domain(self, event_models: List[EventModel]) -> List[Event]:
        if not event_models:
            return []

        event_ids = [model.id for model in event_models]
        subjects = await self._load_links(event_subjects, "subject_id", event_ids)
        criteria = {
            kind: await self._load_links(table, column, event_ids)
            for kind, (table, column) in CRITERIA_LINKS.items()
        }

        events = []
        for model in event_models:
            kind = EventMode(model.mode).criterion_kind
            events.append(
                self.mapper.to_domain(
                    model,
                    subject_ids=subjects.get(model.id, []),
                    criteria_ids=criteria[kind].get(model.id, []),
                )
            )
        return events

    async def _load_links(
        self, table: Table, column: str, event_ids: List[int]
    ) -> Dict[int, List[int]]:
        query = (
            select(table.c.event_id, table.c[column])
            .where(table.c.event_id.in_(event_ids))
            .order_by(table.c.event_id, table.c[column])
        )
        result = await self.session.execute(query)

        links: Dict[int, List[int]] = defaultdict(list)
        for event_id, linked_id in result.all():
            links[event_id].append(linked_id)
        return links

    async def _insert_links(
        self, table: Table, column: str, event_id: int, linked_ids: Iterable[int]
    ) -> None:
        rows = [{"event_id": event_id, column: linked_id} for linked_id in linked_ids]
        if rows:
            await self.session.execute(insert(table), rows)

    async def _sync_links(
        self, table: Table, column: str, event_id: int, desired_ids: Iterable[int]
    ) -> None:
        desired = list(desired_ids)
        current = set((await self._load_links(table, column, [event_id])).get(event_id, []))

        removed = current - set(desired)
        if removed:
            await self.session.execute(
                delete(table).where(table.c.event_id == event_id, table.c[column].in_(removed))
            )
        await self._insert_links(table, column, event_id, [i for i in desired if i not in current])

    async def _sync_assignments(self, event: Event) -> None:
        result = await self.session.execute(
            select(assignments_table.c.id, assignments_table.c.evaluator_id).where(
                assignments_table.c.event_id == event.id
            )
        )
        existing = {evaluator_id: row_id for row_id, evaluator_id in result.all()}

        removed = set(existing) - set(event.evaluator_ids)
        if removed:
            await self.session.execute(
                delete(assignments_table).where(
                    assignments_table.c.event_id == event.id,
                    assignments_table.c.evaluator_id.in_(removed),
                )
            )

        for assignment in event.assignments:
            assignment.event_id = event.id
            values = self.mapper.assignment_values(assignment)
            if assignment.evaluator_id in existing:
                assignment.id = existing[assignment.evaluator_id]
                await self.session.execute(
                    update(assignments_table)
                    .where(assignments_table.c.id == assignment.id)
                    .values(**values)
                )
            else:
                inserted = await self.session.execute(
                    insert(assignments_table).values(
                        event_id=event.id, evaluator_id=assignment.evaluator_id, **values
                    )
                )
                assignment.id = inserted.inserted_primary_key[0]
