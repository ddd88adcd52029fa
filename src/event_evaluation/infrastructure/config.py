"""Runtime settings for event evaluation."""

import os
from dataclasses import dataclass
from typing import Optional

from ..domain.event_management.value_objects.lock_scope import LockScope


@dataclass(frozen=True)
class EventSettings:
    """Behaviour switches read from the environment."""

    lock_scope: LockScope = LockScope.ALL
    require_acceptance: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EventSettings":
        """Create settings from environment variables."""
        return cls(
            lock_scope=LockScope.parse(os.getenv("EVENT_LOCK_SCOPE", "all")),
            require_acceptance=os.getenv("EVALUATION_REQUIRE_ACCEPTANCE", "false").lower()
            == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
        )
