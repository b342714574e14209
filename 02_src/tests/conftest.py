"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class RecordingSink:
    """Sink that keeps every write in memory."""

    def __init__(self):
        self.writes: list[tuple[str, str]] = []

    async def write(self, filename_hint: str, document_text: str) -> None:
        self.writes.append((filename_hint, document_text))


class FailingSink:
    """Sink whose writes always fail."""

    def __init__(self):
        self.attempts = 0

    async def write(self, filename_hint: str, document_text: str) -> None:
        self.attempts += 1
        raise OSError("disk full")


@pytest.fixture
def clock():
    """Controllable millisecond clock."""
    return FakeClock()


@pytest.fixture
def recording_sink():
    """In-memory sink."""
    return RecordingSink()


@pytest.fixture
def failing_sink():
    """Sink that raises on every write."""
    return FailingSink()


@pytest.fixture
def tracker():
    """Create Tracker."""
    from stream_archive.tracker import Tracker

    return Tracker()


@pytest.fixture
def store(recording_sink, tracker, clock):
    """Enabled ArchiveStore with a small threshold."""
    from stream_archive.config import ArchiverOptions
    from stream_archive.store import ArchiveStore

    options = ArchiverOptions(enabled=True, max_messages=5, include_decoded=True)
    return ArchiveStore(
        room_num="123456",
        room_id="7300000000000000001",
        options=options,
        sink=recording_sink,
        tracker=tracker,
        clock=clock,
    )


@pytest_asyncio.fixture
async def sqlite_sink():
    """Create in-memory SQLite sink for testing."""
    from stream_archive.sink import SqliteSink

    sink = SqliteSink(":memory:")
    await sink.init()
    yield sink
    await sink.close()


@pytest.fixture
def make_document():
    """Build an ArchiveDocument from (timestamp, method) pairs."""
    from stream_archive.codec import encode
    from stream_archive.models import ArchiveDocument, ArchiveMetadata, CapturedEvent

    def _make(entries, start_time=None, end_time=None):
        messages = [
            CapturedEvent(
                timestamp=ts,
                method=method,
                msg_id=f"msg{i}",
                payload=encode(bytes([i % 256]) * (i + 1)),
            )
            for i, (ts, method) in enumerate(entries)
        ]
        if start_time is None:
            start_time = messages[0].timestamp if messages else 0
        return ArchiveDocument(
            metadata=ArchiveMetadata(
                room_num="123456",
                room_id="room-1",
                start_time=start_time,
                end_time=end_time,
                message_count=len(messages),
            ),
            messages=messages,
        )

    return _make
