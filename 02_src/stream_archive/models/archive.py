"""Archive data models."""

from dataclasses import dataclass, field
from typing import Any

FORMAT_VERSION = "1.0.0"


@dataclass
class CapturedEvent:
    """A single captured frame."""

    timestamp: int  # ms since epoch
    method: str
    msg_id: str
    payload: str  # base64 of the raw frame
    display_id: str | None = None  # originating user, absent for system events
    decoded: dict[str, Any] | None = None  # redacted decoded copy


@dataclass
class ArchiveMetadata:
    """Running metadata of an archive."""

    room_num: str
    room_id: str
    start_time: int
    message_count: int = 0
    end_time: int | None = None  # stamped on exported snapshots only
    version: str = FORMAT_VERSION


@dataclass
class ArchiveDocument:
    """Export document: metadata plus events in capture order."""

    metadata: ArchiveMetadata
    messages: list[CapturedEvent] = field(default_factory=list)


@dataclass
class ArchiveStats:
    """Live statistics of an archive store."""

    enabled: bool
    message_count: int
    total_exported: int
    start_time: int
    duration: int  # ms since start_time
    estimated_size: int  # bytes
