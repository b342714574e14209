"""Application bootstrap and lifecycle management."""

import os
from typing import Any, Protocol

from .config import ArchiverOptions, resolve_db_path
from .debugger import MessageDebugger
from .logging_config import get_logger
from .sink import FileSink, ISink, SqliteSink
from .store import ArchiveStore
from .tracker import Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop live and stored archive data."""
        ...


class Application:
    """Composes sink, tracker, archive store and debugger for one room."""

    def __init__(
        self,
        db_path: str | None = None,
        room_num: str | None = None,
        room_id: str | None = None,
        options: ArchiverOptions | None = None,
        sink_kind: str | None = None,
        archive_dir: str | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._room_num = room_num if room_num is not None else os.getenv("ROOM_NUM", "0")
        self._room_id = room_id if room_id is not None else os.getenv("ROOM_ID", "")
        self._options = options or ArchiverOptions.from_env()
        self._sink_kind = (sink_kind or os.getenv("ARCHIVE_SINK", "sqlite")).lower()
        self._archive_dir = archive_dir or os.getenv("ARCHIVE_DIR")

        if self._sink_kind not in ("sqlite", "file"):
            raise ValueError(f"Unknown ARCHIVE_SINK: {self._sink_kind!r}")

        # Components (will be initialized in start())
        self._tracker: Tracker | None = None
        self._sink: ISink | None = None
        self._store: ArchiveStore | None = None
        self._debugger: MessageDebugger | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application for room %s", self._room_num)

        # 1. Tracker (no dependencies)
        self._tracker = Tracker()

        # 2. Sink (no dependencies)
        if self._sink_kind == "sqlite":
            sink = SqliteSink(self._db_path)
            await sink.init()
            self._sink = sink
        else:
            self._sink = FileSink(self._archive_dir)
        logger.info("%s sink initialized", self._sink_kind)

        # 3. ArchiveStore (depends on Sink + Tracker)
        self._store = ArchiveStore(
            room_num=self._room_num,
            room_id=self._room_id,
            options=self._options,
            sink=self._sink,
            tracker=self._tracker,
        )
        if self._options.enabled:
            self._store.enable()

        # 4. MessageDebugger (depends on Tracker)
        self._debugger = MessageDebugger(
            enabled=self._options.enabled, tracker=self._tracker
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._store:
            self._store.disable()
            await self._store.flush()
        if isinstance(self._sink, SqliteSink):
            await self._sink.close()
            logger.info("Sink closed")

    async def reset(self) -> None:
        """Drop live and stored archive data."""
        if self._store:
            self._store.clear()
            await self._store.flush()
        if isinstance(self._sink, SqliteSink):
            await self._sink.clear()
            logger.info("Stored archives cleared")
        if self._debugger:
            self._debugger.clear()
        if self._tracker:
            self._tracker.clear()
        logger.info("Reset complete")

    def capture(
        self,
        method: str,
        msg_id: str,
        raw_bytes: bytes,
        decoded: Any = None,
        display_id: str | None = None,
        processed: bool = True,
    ) -> bool:
        """Feed one live frame to the store and the debugger."""
        if decoded is not None:
            self.debugger.record(method, decoded, processed=processed)
        return self.store.capture(
            method, msg_id, raw_bytes, decoded=decoded, display_id=display_id
        )

    @property
    def store(self) -> ArchiveStore:
        """Get archive store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def sink(self) -> ISink:
        """Get sink instance."""
        if not self._sink:
            raise RuntimeError("Application not started")
        return self._sink

    @property
    def tracker(self) -> Tracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def debugger(self) -> MessageDebugger:
        """Get message debugger instance."""
        if not self._debugger:
            raise RuntimeError("Application not started")
        return self._debugger

    @property
    def room_num(self) -> str:
        return self._room_num
