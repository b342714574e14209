"""Stream archive: capture, export and timed replay of live message frames."""

from .analysis import analyze, format_report
from .app import Application, IApplication
from .codec import decode, encode
from .config import ArchiverOptions
from .debugger import MessageDebugger
from .errors import ArchiveError, MalformedEncodingError, ParseError, PreconditionError
from .models import (
    AnalysisReport,
    ArchiveDocument,
    ArchiveMetadata,
    ArchiveStats,
    CapturedEvent,
    TraceEvent,
)
from .redaction import redact
from .replay import ReplayResult, ReplaySession, replay, replay_json
from .scheduler import AutoExportScheduler, RepeatingTask
from .serializer import deserialize, serialize
from .sink import FileSink, ISink, SqliteSink
from .store import ArchiveStore, IArchiveStore
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "ArchiverOptions",
    # Models
    "CapturedEvent",
    "ArchiveMetadata",
    "ArchiveDocument",
    "ArchiveStats",
    "AnalysisReport",
    "TraceEvent",
    # Errors
    "ArchiveError",
    "MalformedEncodingError",
    "ParseError",
    "PreconditionError",
    # Core operations
    "encode",
    "decode",
    "redact",
    "serialize",
    "deserialize",
    "analyze",
    "format_report",
    "replay",
    "replay_json",
    # Components
    "IArchiveStore",
    "ArchiveStore",
    "AutoExportScheduler",
    "RepeatingTask",
    "ReplaySession",
    "ReplayResult",
    "ISink",
    "FileSink",
    "SqliteSink",
    "ITracker",
    "Tracker",
    "MessageDebugger",
]
