"""Bounded in-memory archive of captured frames."""

import asyncio
import copy
import dataclasses
import json
import threading
from typing import Any, Callable, Protocol

from ..clock import now_ms
from ..codec import encode
from ..config import ArchiverOptions
from ..logging_config import get_logger
from ..models import ArchiveDocument, ArchiveMetadata, ArchiveStats, CapturedEvent
from ..redaction import redact
from ..scheduler import AutoExportScheduler
from ..serializer import event_to_dict, serialize
from ..sink import ISink
from ..tracker import ITracker

logger = get_logger(__name__)

# Events sampled by get_stats() to estimate the buffer size
_SIZE_SAMPLE = 10


class IArchiveStore(Protocol):
    """Append-only capture log with export-and-reset."""

    def enable(self) -> None:
        """Start capturing (and the auto-export timer if configured)."""
        ...

    def disable(self) -> None:
        """Stop capturing and cancel the auto-export timer."""
        ...

    def capture(
        self,
        method: str,
        msg_id: str,
        raw_bytes: bytes,
        decoded: Any = None,
        display_id: str | None = None,
    ) -> bool:
        """Record one frame. Returns False when capture is disabled."""
        ...

    def snapshot(self) -> ArchiveDocument:
        """Detached copy of the live archive with end_time stamped."""
        ...

    def export_and_reset(
        self, reason: str = "manual", skip_empty: bool = False
    ) -> ArchiveDocument | None:
        """Snapshot, serialize, hand to the sink, reset."""
        ...

    def clear(self) -> None:
        """Discard live events without exporting them."""
        ...

    def get_stats(self) -> ArchiveStats:
        """Live statistics."""
        ...

    async def flush(self) -> None:
        """Wait for sink writes still in flight."""
        ...


class ArchiveStore:
    """Captures frames for one room and exports them in bounded batches."""

    def __init__(
        self,
        room_num: str,
        room_id: str,
        options: ArchiverOptions | None = None,
        sink: ISink | None = None,
        tracker: ITracker | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        options = options or ArchiverOptions()
        self._enabled = options.enabled
        self._max_messages = options.max_messages
        self._auto_export = options.auto_export
        self._include_decoded = options.include_decoded

        self._sink = sink
        self._tracker = tracker
        self._clock = clock

        self._events: list[CapturedEvent] = []
        self._metadata = ArchiveMetadata(
            room_num=room_num,
            room_id=room_id,
            start_time=self._clock(),
        )
        self._export_count = 0
        self._lock = threading.RLock()
        self._pending: set[asyncio.Task] = set()

        # Owned by enable()/disable(), never started here
        self._scheduler = AutoExportScheduler(self, options.export_interval, tracker)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def events(self) -> list[CapturedEvent]:
        """Copy of the live event sequence."""
        with self._lock:
            return list(self._events)

    @property
    def metadata(self) -> ArchiveMetadata:
        """Copy of the live metadata."""
        with self._lock:
            return dataclasses.replace(self._metadata)

    @property
    def scheduler(self) -> AutoExportScheduler:
        return self._scheduler

    @property
    def total_exported(self) -> int:
        return self._export_count

    def enable(self) -> None:
        """Start capturing (and the auto-export timer if configured)."""
        self._enabled = True
        logger.info("Archiving enabled for room %s", self._metadata.room_num)

        if self._auto_export:
            try:
                self._scheduler.start()
            except RuntimeError:
                logger.warning("No running event loop, auto-export not scheduled")

        self._track("archive_enabled", {"auto_export": self._auto_export})

    def disable(self) -> None:
        """Stop capturing and cancel the auto-export timer."""
        self._enabled = False
        self._scheduler.stop()
        logger.info("Archiving disabled for room %s", self._metadata.room_num)
        self._track("archive_disabled", {})

    def capture(
        self,
        method: str,
        msg_id: str,
        raw_bytes: bytes,
        decoded: Any = None,
        display_id: str | None = None,
    ) -> bool:
        """Record one frame. Returns False when capture is disabled.

        Reaching max_messages exports and resets the archive before returning.
        """
        if not self._enabled:
            return False

        with self._lock:
            if not self._enabled:
                return False

            event = CapturedEvent(
                timestamp=self._clock(),
                method=method,
                msg_id=msg_id,
                payload=encode(raw_bytes),
                display_id=display_id or None,
            )
            if self._include_decoded and decoded is not None:
                event.decoded = redact(decoded)

            self._events.append(event)
            self._metadata.message_count += 1

            if len(self._events) >= self._max_messages:
                logger.warning(
                    "Archive reached %d messages, exporting", self._max_messages
                )
                self.export_and_reset(reason="threshold")

        return True

    def snapshot(self) -> ArchiveDocument:
        """Detached copy of the live archive with end_time stamped."""
        with self._lock:
            metadata = dataclasses.replace(self._metadata, end_time=self._clock())
            return ArchiveDocument(
                metadata=metadata,
                messages=copy.deepcopy(self._events),
            )

    def export_json(self) -> str:
        """Serialized snapshot; live state is left untouched."""
        return serialize(self.snapshot())

    def export_and_reset(
        self, reason: str = "manual", skip_empty: bool = False
    ) -> ArchiveDocument | None:
        """Snapshot, serialize, hand to the sink, reset.

        The sink write runs in the background; whatever happens to it, the live
        archive is reset. Returns the exported document, or None when
        skip_empty is set and nothing was captured.
        """
        with self._lock:
            if skip_empty and not self._events:
                return None

            document = self.snapshot()
            filename = self._filename_hint()
            self._export_count += 1

            try:
                text = serialize(document)
            except (TypeError, ValueError) as e:
                logger.error("Failed to serialize %s: %s", filename, e, exc_info=True)
                self._track("export_failed", {"filename": filename, "error": str(e)})
            else:
                self._dispatch(filename, text)

            self.reset_after_export()

        logger.info(
            "Exported %d messages (%s) as %s",
            len(document.messages),
            reason,
            filename,
        )
        self._track(
            "archive_exported",
            {
                "reason": reason,
                "filename": filename,
                "message_count": len(document.messages),
            },
        )
        return document

    def reset_after_export(self) -> None:
        """Empty the live archive and restart its time window."""
        with self._lock:
            self._events = []
            self._metadata.message_count = 0
            self._metadata.start_time = self._clock()
            self._metadata.end_time = None

    def clear(self) -> None:
        """Discard live events without exporting them."""
        self.reset_after_export()
        logger.info("Archive cleared")
        self._track("archive_cleared", {})

    def get_stats(self) -> ArchiveStats:
        """Live statistics."""
        with self._lock:
            return ArchiveStats(
                enabled=self._enabled,
                message_count=len(self._events),
                total_exported=self._export_count,
                start_time=self._metadata.start_time,
                duration=self._clock() - self._metadata.start_time,
                estimated_size=self._estimate_size(),
            )

    async def flush(self) -> None:
        """Wait for sink writes still in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _estimate_size(self) -> int:
        if not self._events:
            return 0

        sample = self._events[:_SIZE_SAMPLE]
        total = sum(
            len(json.dumps(event_to_dict(event), ensure_ascii=False, default=str))
            for event in sample
        )
        return round(total / len(sample) * len(self._events))

    def _filename_hint(self) -> str:
        return (
            f"archive-{self._metadata.room_num}-{self._clock()}"
            f"-{self._export_count + 1}.json"
        )

    def _dispatch(self, filename: str, text: str) -> None:
        """Hand the document to the sink without waiting for it."""
        if not self._sink:
            logger.warning("No sink configured, export %s dropped", filename)
            return

        coro = self._write_safely(filename, text)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller: finish the write before returning
            asyncio.run(coro)
            return

        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write_safely(self, filename: str, text: str) -> None:
        try:
            await self._sink.write(filename, text)
        except Exception as e:
            logger.error("Sink write failed for %s: %s", filename, e, exc_info=True)
            self._track("export_failed", {"filename": filename, "error": str(e)})
        else:
            self._track("archive_written", {"filename": filename})

    def _track(self, event_type: str, data: dict[str, Any]) -> None:
        if self._tracker:
            self._tracker.track(event_type=event_type, actor="archive_store", data=data)
