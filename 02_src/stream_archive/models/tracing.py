"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class TraceEvent:
    """A single observability event reported by archive components."""

    id: str
    event_type: str  # e.g. "archive_exported", "replay_completed"
    actor: str  # "archive_store", "replay", "debugger", ...
    data: dict[str, Any]
    timestamp: datetime
