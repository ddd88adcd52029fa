"""Lock scope policy for locked events."""

from enum import Enum
from typing import FrozenSet

RELATIONSHIP_FIELDS: FrozenSet[str] = frozenset({"subject_ids", "criteria_ids", "evaluator_ids"})

SCALAR_FIELDS: FrozenSet[str] = frozenset(
    {
        "name",
        "starts_at",
        "ends_at",
        "team_id",
        "hide_subject_names",
        "hide_preferred_positions",
        "send_invites",
        "is_active",
    }
)


class LockScope(Enum):
    """Which event fields a lock protects. The lock flag itself is never protected."""

    RELATIONSHIPS = "relationships"
    ALL = "all"

    @property
    def protected_fields(self) -> FrozenSet[str]:
        if self is LockScope.RELATIONSHIPS:
            return RELATIONSHIP_FIELDS
        return RELATIONSHIP_FIELDS | SCALAR_FIELDS

    def blocked(self, fields: FrozenSet[str]) -> FrozenSet[str]:
        """Return the subset of touched fields a lock forbids."""
        return frozenset(fields) & self.protected_fields

    @classmethod
    def parse(cls, value: str) -> "LockScope":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid lock scope '{value}', expected one of: "
                f"{', '.join(s.value for s in cls)}"
            )
