"""Reconciliation result value object."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List


@dataclass(frozen=True)
class SyncResult:
    """Outcome of reconciling a desired id set against the current one."""

    added: List[int]
    removed: List[int]
    kept: List[int]
    before: List[int] = field(default_factory=list)
    after: List[int] = field(default_factory=list)

    @classmethod
    def compute(cls, current: Iterable[int], desired: Iterable[int]) -> "SyncResult":
        """Compute added/removed/kept between current and desired membership."""
        current_ids = list(dict.fromkeys(current))
        desired_ids = list(dict.fromkeys(desired))
        current_set = set(current_ids)
        desired_set = set(desired_ids)

        return cls(
            added=[i for i in desired_ids if i not in current_set],
            removed=[i for i in current_ids if i not in desired_set],
            kept=[i for i in desired_ids if i in current_set],
            before=current_ids,
            after=desired_ids,
        )

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "kept": list(self.kept),
            "changes": {
                "before": list(self.before),
                "after": list(self.after),
                "total": {
                    "added": len(self.added),
                    "removed": len(self.removed),
                    "kept": len(self.kept),
                },
            },
        }
