"""Core data models for the stream archiver."""

from .analysis import AnalysisReport
from .archive import (
    FORMAT_VERSION,
    ArchiveDocument,
    ArchiveMetadata,
    ArchiveStats,
    CapturedEvent,
)
from .debugger import MessageSample, MessageStat
from .tracing import TraceEvent

__all__ = [
    # Archive
    "FORMAT_VERSION",
    "CapturedEvent",
    "ArchiveMetadata",
    "ArchiveDocument",
    "ArchiveStats",
    # Analysis
    "AnalysisReport",
    # Debugger
    "MessageSample",
    "MessageStat",
    # Tracing
    "TraceEvent",
]
