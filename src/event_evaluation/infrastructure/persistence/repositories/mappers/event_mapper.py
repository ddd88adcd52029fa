"""Domain-model mapper for Event Management domain."""

from typing import Iterable

from .....domain.event_management.entities.evaluator_assignment import EvaluatorAssignment
from .....domain.event_management.entities.event import Event
from .....domain.event_management.value_objects.criteria import criteria_for_mode
from ...models.event_models import EvaluatorAssignmentModel, EventModel


class EventMapper:
    """Mapper between Event aggregates and database models."""

    def to_model(self, event: Event) -> EventModel:
        """Convert Event aggregate to database model, assignments included."""
        event_model = EventModel(
            id=event.id,
            version=event.version,
            created_at=event.created_at,
            **self.scalar_values(event),
        )
        event_model.assignments = [self.assignment_to_model(a) for a in event.assignments]
        return event_model

    def scalar_values(self, event: Event) -> dict:
        """Column values written on every save."""
        return {
            "group_id": event.group_id,
            "team_id": event.team_id,
            "created_by_id": event.created_by_id,
            "name": event.name,
            "mode": event.mode,
            "starts_at": event.starts_at,
            "ends_at": event.ends_at,
            "hide_subject_names": event.hide_subject_names,
            "hide_preferred_positions": event.hide_preferred_positions,
            "send_invites": event.send_invites,
            "is_active": event.is_active,
            "locked": event.locked,
            "updated_at": event.updated_at,
        }

    def to_domain(
        self,
        event_model: EventModel,
        subject_ids: Iterable[int],
        criteria_ids: Iterable[int],
    ) -> Event:
        """Convert database model and its link rows to an Event aggregate."""
        event = Event(
            id=event_model.id,
            name=event_model.name,
            mode=event_model.mode,
            starts_at=event_model.starts_at,
            ends_at=event_model.ends_at,
            group_id=event_model.group_id,
            criteria=criteria_for_mode(event_model.mode, criteria_ids),
            subject_ids=list(subject_ids),
            assignments=[self.assignment_to_domain(m) for m in event_model.assignments],
            team_id=event_model.team_id,
            created_by_id=event_model.created_by_id,
            hide_subject_names=event_model.hide_subject_names,
            hide_preferred_positions=event_model.hide_preferred_positions,
            send_invites=event_model.send_invites,
            is_active=event_model.is_active,
            locked=event_model.locked,
            version=event_model.version,
            created_at=event_model.created_at,
            updated_at=event_model.updated_at,
        )

        # Clear domain events after loading from database
        event.clear_domain_events()

        return event

    def assignment_to_model(self, assignment: EvaluatorAssignment) -> EvaluatorAssignmentModel:
        return EvaluatorAssignmentModel(
            id=assignment.id,
            evaluator_id=assignment.evaluator_id,
            **self.assignment_values(assignment),
        )

    def assignment_values(self, assignment: EvaluatorAssignment) -> dict:
        """Mutable assignment columns."""
        return {
            "status": assignment.status,
            "invitation_sent_at": assignment.invitation_sent_at,
            "accepted_at": assignment.accepted_at,
            "completed_at": assignment.completed_at,
        }

    def assignment_to_domain(self, model: EvaluatorAssignmentModel) -> EvaluatorAssignment:
        return EvaluatorAssignment(
            id=model.id,
            event_id=model.event_id,
            evaluator_id=model.evaluator_id,
            status=model.status,
            invitation_sent_at=model.invitation_sent_at,
            accepted_at=model.accepted_at,
            completed_at=model.completed_at,
        )
