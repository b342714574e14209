"""Tracker implementation for reporting TraceEvents."""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Protocol

from ..logging_config import get_logger
from ..models import TraceEvent

logger = get_logger(__name__)


class ITracker(Protocol):
    """Observability collaborator injected into archive components."""

    def track(self, event_type: str, actor: str, data: dict[str, Any]) -> None:
        """Report a TraceEvent."""
        ...


class Tracker:
    """Keeps a bounded in-memory history of TraceEvents and logs them."""

    def __init__(self, max_events: int = 1000):
        self._events: deque[TraceEvent] = deque(maxlen=max_events)

    def track(self, event_type: str, actor: str, data: dict[str, Any]) -> None:
        """Create a TraceEvent and record it."""
        self.report(
            TraceEvent(
                id=str(uuid.uuid4()),
                event_type=event_type,
                actor=actor,
                data=data,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def report(self, event: TraceEvent) -> None:
        """Record an already built TraceEvent."""
        self._events.append(event)
        logger.debug(
            "%s: %s",
            event.actor,
            event.event_type,
            extra={"context": event.data},
        )

    def get_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        result = []
        for event in reversed(self._events):
            if after and event.timestamp <= after:
                continue
            if event_types and event.event_type not in event_types:
                continue
            if actor and event.actor != actor:
                continue
            result.append(event)
            if len(result) >= limit:
                break
        return result

    def clear(self) -> None:
        """Drop the recorded history."""
        self._events.clear()
