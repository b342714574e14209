"""Message debugger data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MessageSample:
    """A redacted sample of one message."""

    timestamp: int
    data: dict[str, Any] | None
    processed: bool


@dataclass
class MessageStat:
    """Per-method counters kept by the debugger."""

    method: str
    count: int
    last_seen: int
    samples: list[MessageSample] = field(default_factory=list)
